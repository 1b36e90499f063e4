"""
Agent Fleet Registry and Workflows

Spawned agents live in a JSON registry. The spawner adds agents for newly
discovered tokens; the rotator ranks tokens with every agent in turn.
"""

from .models import (
    AgentRecord, CandidateSubject, Participant,
    SpawnReport, ParticipantResult, RotationReport,
)
from .storage import AgentStorage
from .registry import AgentRegistry
from .discovery import select_candidates, listing_limit
from .spawner import AgentSpawner
from .rotator import AgentRotator, build_participants

__all__ = [
    "AgentRecord",
    "CandidateSubject",
    "Participant",
    "SpawnReport",
    "ParticipantResult",
    "RotationReport",
    "AgentStorage",
    "AgentRegistry",
    "select_candidates",
    "listing_limit",
    "AgentSpawner",
    "AgentRotator",
    "build_participants",
]
