"""Shared fakes for workflow tests."""

import pytest

from agentfleet.agents import AgentRecord, AgentRegistry, AgentStorage, CandidateSubject
from agentfleet.client import DataPoint, Registration, Submission
from agentfleet.pacing import RankPacing, SpawnPacing


class RecordingPacer:
    """Pacer that only counts how often it was awaited."""

    def __init__(self):
        self.waits = 0

    async def wait(self):
        self.waits += 1


class FakeClient:
    """In-memory stand-in for PumpStudioClient."""

    def __init__(self):
        self.market = []
        self.market_error = None
        self.market_errors_by_key = {}
        self.rejected_registrations = {}
        self.register_errors = {}
        self.profile_ok = True
        self.profile_error = None
        self.avatar_ok = True
        self.avatar_error = None
        self.data_points = {}
        self.submissions = {}
        self.calls = []

    async def get_market(self, tab, limit, key=None):
        self.calls.append(("get_market", tab, limit, key))
        if key in self.market_errors_by_key:
            raise self.market_errors_by_key[key]
        if self.market_error:
            raise self.market_error
        return list(self.market[:limit])

    async def register(self, name):
        self.calls.append(("register", name))
        if name in self.register_errors:
            raise self.register_errors[name]
        if name in self.rejected_registrations:
            return Registration(error=self.rejected_registrations[name])
        return Registration(key=f"key-{name.lower().replace(' ', '-')}")

    async def set_profile(self, key, name, description):
        self.calls.append(("set_profile", key, name, description))
        if self.profile_error:
            raise self.profile_error
        return self.profile_ok

    async def set_avatar(self, key, image_url):
        self.calls.append(("set_avatar", key, image_url))
        if self.avatar_error:
            raise self.avatar_error
        return image_url if self.avatar_ok else None

    async def get_data_point(self, mint, key=None):
        self.calls.append(("get_data_point", mint, key))
        value = self.data_points.get(mint)
        if isinstance(value, Exception):
            raise value
        return value or DataPoint(mint=mint, symbol=mint.upper())

    async def submit_analysis(self, key, submission):
        self.calls.append(("submit_analysis", key, submission.mint))
        return self.submissions.get(submission.mint, Submission(ok=True, xpEarned=10))

    def called(self, method):
        return [c for c in self.calls if c[0] == method]


def make_token(i, **overrides) -> CandidateSubject:
    fields = {
        "mint": f"mint{i}",
        "name": f"Token {i}",
        "symbol": f"TK{i}",
        "image_uri": f"https://img.example/{i}.png",
        "usd_market_cap": 1000.0 * i,
    }
    fields.update(overrides)
    return CandidateSubject(**fields)


def make_record(i, **overrides) -> AgentRecord:
    fields = {
        "name": f"Agent {i}",
        "symbol": f"AG{i}",
        "mint": f"agentmint{i}",
        "key": f"agent-key-{i}",
        "avatarUrl": f"https://img.example/agent{i}.png",
    }
    fields.update(overrides)
    return AgentRecord(**fields)


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def agents_path(tmp_path):
    return tmp_path / "agents.json"


@pytest.fixture
def registry(agents_path):
    return AgentRegistry(storage=AgentStorage(str(agents_path)))


@pytest.fixture
def spawn_pacing():
    return SpawnPacing(between_candidates=RecordingPacer(), after_failure=RecordingPacer())


@pytest.fixture
def rank_pacing():
    return RankPacing(between_submissions=RecordingPacer(), between_participants=RecordingPacer())
