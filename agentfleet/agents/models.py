"""
Agent Fleet Models

Pydantic models for spawned agents, discovery candidates and workflow reports.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, List, Any
from pydantic import BaseModel, ConfigDict, Field

from ..client.models import CandidateSubject


class AgentRecord(BaseModel):
    """A spawned agent identity, as persisted in the registry file."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(..., description="Display name (case-insensitive dedup key)")
    symbol: str = Field(..., description="Ticker of the tracked token")
    mint: str = Field(..., description="Mint of the tracked token (primary dedup key)")
    key: str = Field(..., description="API key issued at registration")
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")
    registered_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="registeredAt",
    )

    @property
    def name_key(self) -> str:
        return self.name.lower()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)


class Participant(BaseModel):
    """An identity driven through the ranking workflow."""
    name: str
    key: str

    @classmethod
    def from_record(cls, record: AgentRecord) -> "Participant":
        return cls(name=record.name, key=record.key)


# =============================================================================
# Reports
# =============================================================================

class SpawnReport(BaseModel):
    """Outcome of one spawn run."""
    spawned: List[AgentRecord] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list, description="Candidate names not spawned")
    candidates: int = 0
    registry_size: int = 0

    @property
    def spawned_count(self) -> int:
        return len(self.spawned)


class ParticipantResult(BaseModel):
    """Ranking sub-totals for one participant."""
    name: str
    submitted: int = 0
    xp: float = 0
    failed: int = 0
    error: Optional[str] = None


class RotationReport(BaseModel):
    """Outcome of one rank-all run."""
    participants: List[ParticipantResult] = Field(default_factory=list)

    @property
    def total_submitted(self) -> int:
        return sum(p.submitted for p in self.participants)

    @property
    def total_xp(self) -> float:
        return sum(p.xp for p in self.participants)

    @property
    def participant_count(self) -> int:
        return len(self.participants)
