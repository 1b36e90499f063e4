"""
Agent Rotator

Ranks tokens with every agent in turn: the optional self identity first,
then each spawned agent in registry order.
"""

import logging
from typing import Callable, List

from ..client.models import Analysis, AnalysisSubmission, DataPoint
from ..config import RankConfig
from ..pacing import RankPacing
from .models import AgentRecord, Participant, ParticipantResult, RotationReport

logger = logging.getLogger("agentfleet.agents.rotator")

Analyzer = Callable[[DataPoint], Analysis]


def build_participants(records: List[AgentRecord], self_key: str = None, self_name: str = "self") -> List[Participant]:
    """Self identity (when a key is configured) followed by every record."""
    participants = []
    if self_key:
        participants.append(Participant(name=self_name, key=self_key))
    participants.extend(Participant.from_record(r) for r in records)
    return participants


class AgentRotator:
    """Drives each participant through fetch -> analyze -> submit."""

    def __init__(
        self,
        client,
        config: RankConfig,
        pacing: RankPacing,
        analyzer: Analyzer,
    ):
        self.client = client
        self.config = config
        self.pacing = pacing
        self.analyzer = analyzer

    async def run(self, records: List[AgentRecord]) -> RotationReport:
        participants = build_participants(records, self.config.self_key, self.config.self_name)
        report = RotationReport()

        if not participants:
            logger.info("No agents found (set a self key or run spawn first)")
            return report

        logger.info(f"{len(participants)} agents loaded")

        for i, participant in enumerate(participants):
            logger.info(f"-> [{i + 1}/{len(participants)}] {participant.name}")
            result = await self.rank_with(participant)
            report.participants.append(result)
            logger.info(f"[{participant.name}] {result.submitted} submitted, +{result.xp:g} XP")

            if i < len(participants) - 1:
                await self.pacing.between_participants.wait()

        logger.info(
            f"Rotation done: {report.total_submitted} submissions, "
            f"+{report.total_xp:g} XP across {report.participant_count} agents"
        )
        return report

    async def rank_with(self, participant: Participant) -> ParticipantResult:
        """Rank one batch of tokens with a single participant."""
        result = ParticipantResult(name=participant.name)

        try:
            tokens = await self.client.get_market(
                self.config.tab, self.config.count, key=participant.key
            )
        except Exception as e:
            logger.warning(f"[{participant.name}] market fetch failed: {e}")
            result.error = str(e)
            return result

        if not tokens:
            logger.info(f"[{participant.name}] no tokens found")
            return result

        for i, token in enumerate(tokens):
            label = f"[{participant.name}][{i + 1}/{len(tokens)}]"

            try:
                dp = await self.client.get_data_point(token.mint, key=participant.key)
                analysis = self.analyzer(dp)
                submission = await self.client.submit_analysis(
                    participant.key,
                    AnalysisSubmission(mint=token.mint, **analysis.model_dump()),
                )

                if submission.ok:
                    result.submitted += 1
                    result.xp += submission.xp_earned
                    logger.info(f"{label} {token.symbol} -> {analysis.sentiment.upper()} +{submission.xp_earned:g}XP")
                else:
                    result.failed += 1
                    logger.warning(f"{label} {token.symbol} -> rejected: {submission.error}")
            except Exception as e:
                result.failed += 1
                logger.warning(f"{label} {token.symbol} -> ERR {e}")

            if i < len(tokens) - 1:
                await self.pacing.between_submissions.wait()

        return result
