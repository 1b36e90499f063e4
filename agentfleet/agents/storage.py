"""
Agent Registry Storage

JSON-file storage for spawned agents. The whole registry is one snapshot
that is replaced on every save, so an interrupted run always leaves the
last complete snapshot behind.

Only one writer may use a store at a time. Nothing here locks the file;
run a single spawn workflow per store.
"""

import os
import json
import logging
import tempfile
from pathlib import Path
from typing import List

from pydantic import TypeAdapter, ValidationError

from .models import AgentRecord

logger = logging.getLogger("agentfleet.agents.storage")

_records = TypeAdapter(List[AgentRecord])


class AgentStorage:
    """JSON file storage for the agent registry."""

    def __init__(self, path: str = "./agents.json"):
        self.path = Path(path)

    def load(self) -> List[AgentRecord]:
        """
        Read all records in stored order.

        A missing, unreadable or malformed file yields an empty list.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info(f"No agent registry at {self.path}, starting empty")
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read agent registry {self.path}: {e}")
            return []

        try:
            records = _records.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Agent registry {self.path} is not valid ({e.error_count()} errors), treating as empty"
            )
            return []

        logger.debug(f"Loaded {len(records)} agents from {self.path}")
        return records

    def save(self, records: List[AgentRecord]) -> None:
        """Replace the stored snapshot with `records`."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)

        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

        logger.debug(f"Saved {len(records)} agents to {self.path}")
