"""
Agent Registry

Ordered, in-memory view of the spawned agents backed by AgentStorage.
Appends are checked against the uniqueness rules and persisted at once.
"""

import logging
from typing import Iterator, List, Optional, Set

from ..errors import DuplicateAgentError
from .models import AgentRecord
from .storage import AgentStorage

logger = logging.getLogger("agentfleet.agents.registry")


class AgentRegistry:
    """
    Agent Registry

    Records keep insertion order (oldest first); rotation follows it.
    No two records share a mint or a case-insensitive name.
    """

    def __init__(self, storage: AgentStorage = None, records: Optional[List[AgentRecord]] = None):
        self.storage = storage or AgentStorage()
        self._records: List[AgentRecord] = list(records or [])

    @classmethod
    def load(cls, storage: AgentStorage) -> "AgentRegistry":
        """Build a registry from whatever the storage currently holds."""
        return cls(storage=storage, records=storage.load())

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def records(self) -> List[AgentRecord]:
        return list(self._records)

    @property
    def mints(self) -> Set[str]:
        return {r.mint for r in self._records}

    @property
    def names(self) -> Set[str]:
        """Lower-cased names."""
        return {r.name_key for r in self._records}

    def has_mint(self, mint: str) -> bool:
        return mint in self.mints

    def has_name(self, name: str) -> bool:
        return name.lower() in self.names

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[AgentRecord]:
        return iter(list(self._records))

    # =========================================================================
    # Mutation
    # =========================================================================

    def append(self, record: AgentRecord) -> AgentRecord:
        """Append a record and rewrite the store."""
        if self.has_mint(record.mint):
            raise DuplicateAgentError(f"Agent for mint {record.mint} already registered")
        if self.has_name(record.name):
            raise DuplicateAgentError(f"Agent named '{record.name}' already registered")

        self._records.append(record)
        try:
            self.storage.save(self._records)
        except Exception:
            self._records.pop()
            raise

        logger.info(f"Registered agent: {record.name} (${record.symbol}, mint: {record.mint[:8]}...)")
        return record
