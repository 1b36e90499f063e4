"""
Test Agent Registry functionality.

Run: python3 -m pytest tests/test_agent_registry.py -v
"""

import json
import os
from datetime import datetime, timezone

import pytest

from agentfleet.agents import AgentRecord, AgentRegistry, AgentStorage
from agentfleet.errors import DuplicateAgentError

from conftest import make_record


def test_save_load_round_trip(agents_path):
    """Save then load reproduces the same ordered records."""
    storage = AgentStorage(str(agents_path))
    records = [
        make_record(3),
        make_record(1, avatarUrl=None),
        make_record(2, registeredAt=datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)),
    ]

    storage.save(records)
    loaded = storage.load()

    assert loaded == records
    assert [r.mint for r in loaded] == ["agentmint3", "agentmint1", "agentmint2"]
    assert loaded[1].avatar_url is None


def test_persisted_format(agents_path):
    """The store is an indented JSON list with camelCase field names."""
    storage = AgentStorage(str(agents_path))
    storage.save([make_record(1)])

    raw = agents_path.read_text()
    data = json.loads(raw)
    assert isinstance(data, list)
    assert set(data[0]) == {"name", "symbol", "mint", "key", "avatarUrl", "registeredAt"}
    assert raw.startswith("[\n  {")


def test_load_existing_file_written_elsewhere(agents_path):
    """Records written by another tool (ISO timestamps with millis) load."""
    agents_path.write_text(json.dumps([{
        "name": "Moon Cat",
        "symbol": "MCAT",
        "mint": "So1aNaMint",
        "key": "ps_live_abc",
        "avatarUrl": None,
        "registeredAt": "2025-01-02T03:04:05.678Z",
    }]))

    records = AgentStorage(str(agents_path)).load()
    assert len(records) == 1
    assert records[0].name == "Moon Cat"
    assert records[0].registered_at.tzinfo is not None


def test_missing_store_is_empty(tmp_path):
    """A store that does not exist yet loads as empty."""
    assert AgentStorage(str(tmp_path / "nope" / "agents.json")).load() == []


@pytest.mark.parametrize("content", ["", "{not json", '{"name": "x"}', '[{"name": "only a name"}]'])
def test_corrupt_store_is_empty(agents_path, content):
    """Unparseable or invalid stores load as empty instead of raising."""
    agents_path.write_text(content)
    assert AgentStorage(str(agents_path)).load() == []


@pytest.mark.parametrize("content", [b"\xff\xfe\x00garbage", b"[{\"name\": \"\xe9\"}]"])
def test_non_utf8_store_is_empty(agents_path, content):
    """Bytes that are not UTF-8 load as empty too."""
    agents_path.write_bytes(content)
    assert AgentStorage(str(agents_path)).load() == []


def test_save_replaces_whole_snapshot(agents_path):
    """Each save overwrites the previous snapshot and leaves no temp files."""
    storage = AgentStorage(str(agents_path))
    storage.save([make_record(1), make_record(2)])
    storage.save([make_record(5)])

    assert [r.mint for r in storage.load()] == ["agentmint5"]
    assert os.listdir(agents_path.parent) == ["agents.json"]


def test_save_creates_parent_directory(tmp_path):
    path = tmp_path / "data" / "fleet" / "agents.json"
    AgentStorage(str(path)).save([make_record(1)])
    assert path.exists()


def test_append_persists_immediately(registry, agents_path):
    """Appending writes the store before returning."""
    registry.append(make_record(1))
    registry.append(make_record(2))

    reloaded = AgentRegistry.load(AgentStorage(str(agents_path)))
    assert [r.name for r in reloaded] == ["Agent 1", "Agent 2"]
    assert len(reloaded) == 2


def test_append_rejects_duplicate_mint(registry, agents_path):
    """Same mint, different name is still a duplicate."""
    registry.append(make_record(1))

    with pytest.raises(DuplicateAgentError):
        registry.append(make_record(2, mint="agentmint1"))

    assert len(registry) == 1
    assert len(AgentStorage(str(agents_path)).load()) == 1


def test_append_rejects_duplicate_name_case_insensitive(registry):
    registry.append(make_record(1, name="Pepe Coin"))

    with pytest.raises(DuplicateAgentError):
        registry.append(make_record(2, name="PEPE coin"))

    assert registry.has_name("pepe COIN")
    assert registry.names == {"pepe coin"}


def test_failed_save_does_not_keep_record(tmp_path):
    """If the store cannot be written the record is not kept in memory."""
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    registry = AgentRegistry(storage=AgentStorage(str(blocker / "agents.json")))

    with pytest.raises(OSError):
        registry.append(make_record(1))

    assert len(registry) == 0


def test_records_are_immutable():
    record = make_record(1)
    with pytest.raises(Exception):
        record.key = "other"
    assert isinstance(record, AgentRecord)
