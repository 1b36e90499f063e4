"""
Request pacing.

Fixed pauses between remote calls are the fleet's only backpressure. They
live behind a small pacer interface so the workflows never sleep inline
and a different policy can be swapped in without touching them.
"""

import asyncio
import logging
from typing import Protocol

from .config import PacingConfig

logger = logging.getLogger("agentfleet.pacing")


class Pacer(Protocol):
    """Anything that can be awaited between two remote calls."""

    async def wait(self) -> None:
        ...


class FixedDelayPacer:
    """Sleeps for the same number of seconds every time."""

    def __init__(self, seconds: float, label: str = "pause"):
        if seconds < 0:
            raise ValueError("seconds must not be negative")
        self.seconds = seconds
        self.label = label

    async def wait(self) -> None:
        if self.seconds <= 0:
            return
        logger.debug(f"{self.label}: sleeping {self.seconds:g}s")
        await asyncio.sleep(self.seconds)

    def __repr__(self) -> str:
        return f"FixedDelayPacer({self.seconds!r}, label={self.label!r})"


class SpawnPacing:
    """Pacers used by the spawner."""

    def __init__(self, between_candidates: Pacer, after_failure: Pacer):
        self.between_candidates = between_candidates
        self.after_failure = after_failure

    @classmethod
    def from_config(cls, config: PacingConfig) -> "SpawnPacing":
        return cls(
            between_candidates=FixedDelayPacer(config.candidate_delay, "candidate"),
            after_failure=FixedDelayPacer(config.failure_delay, "registration failure"),
        )


class RankPacing:
    """Pacers used by the rotator."""

    def __init__(self, between_submissions: Pacer, between_participants: Pacer):
        self.between_submissions = between_submissions
        self.between_participants = between_participants

    @classmethod
    def from_config(cls, config: PacingConfig) -> "RankPacing":
        return cls(
            between_submissions=FixedDelayPacer(config.submission_cooldown, "cooldown"),
            between_participants=FixedDelayPacer(config.participant_delay, "next agent"),
        )
