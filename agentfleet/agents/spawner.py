"""
Agent Spawner

Discovers obscure tokens, registers one agent per token using the token's
name and image, and saves each new key to the registry as soon as it exists.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

import httpx

from ..config import SpawnConfig
from ..errors import RemoteServiceError
from ..pacing import SpawnPacing
from .discovery import listing_limit, select_candidates
from .models import AgentRecord, CandidateSubject, SpawnReport
from .registry import AgentRegistry

logger = logging.getLogger("agentfleet.agents.spawner")

_CALL_ERRORS = (RemoteServiceError, httpx.HTTPError)


def profile_description(symbol: str) -> str:
    return f"Autonomous quant agent tracking ${symbol} on Solana"


class AgentSpawner:
    """
    Runs the spawn workflow against the remote service.

    Per candidate: register -> profile -> avatar -> commit. Only a failed
    registration drops a candidate; profile and avatar are best effort.
    """

    def __init__(
        self,
        client,
        registry: AgentRegistry,
        config: SpawnConfig,
        pacing: SpawnPacing,
    ):
        self.client = client
        self.registry = registry
        self.config = config
        self.pacing = pacing

    async def discover(self) -> List[CandidateSubject]:
        """Fetch the market listing and shortlist spawn candidates."""
        limit = listing_limit(self.config.offset, self.config.count)
        logger.info(f"DISCOVER fetching {limit} tokens from '{self.config.tab}'")
        tokens = await self.client.get_market(self.config.tab, limit)
        candidates = select_candidates(
            tokens, self.registry, self.config.offset, self.config.count
        )
        logger.info(f"Found {len(candidates)} candidates in {len(tokens)} tokens")
        return candidates

    async def run(self) -> SpawnReport:
        """Discover and spawn. Listing failures propagate."""
        logger.info(f"{len(self.registry)} existing agents loaded")
        candidates = await self.discover()
        if not candidates:
            logger.info("No suitable candidates found")
            return SpawnReport(registry_size=len(self.registry))
        return await self.spawn_all(candidates)

    async def spawn_all(self, candidates: List[CandidateSubject]) -> SpawnReport:
        report = SpawnReport(candidates=len(candidates))

        for i, token in enumerate(candidates):
            label = f"[{i + 1}/{len(candidates)}]"
            is_last = i == len(candidates) - 1
            logger.info(f"{label} --- {token.name} ({token.symbol}) ---")

            # Listings can repeat a token; the registry must not
            if self.registry.has_mint(token.mint) or self.registry.has_name(token.name):
                logger.info(f"{label} SKIP already registered")
                report.skipped.append(token.name)
                continue

            key = await self._register(label, token)
            if key is None:
                logger.info(f"{label} SKIP")
                report.skipped.append(token.name)
                await self.pacing.after_failure.wait()
                continue

            await self._set_profile(label, key, token)
            avatar_url = await self._set_avatar(label, key, token)

            record = AgentRecord(
                name=token.name,
                symbol=token.symbol,
                mint=token.mint,
                key=key,
                avatar_url=avatar_url,
                registered_at=datetime.now(timezone.utc),
            )
            self.registry.append(record)
            report.spawned.append(record)

            if not is_last:
                await self.pacing.between_candidates.wait()

        report.registry_size = len(self.registry)
        logger.info(f"Spawned {report.spawned_count} new agents ({report.registry_size} total)")
        return report

    # =========================================================================
    # Steps
    # =========================================================================

    async def _register(self, label: str, token: CandidateSubject) -> Optional[str]:
        logger.info(f"{label} REGISTER {token.name}")
        try:
            registration = await self.client.register(token.name)
        except _CALL_ERRORS as e:
            logger.warning(f"{label} REG FAIL: {e}")
            return None

        if not registration.ok:
            logger.warning(f"{label} REG FAIL: {registration.error}")
            return None

        logger.info(f"{label} KEY {registration.key[:12]}...")
        return registration.key

    async def _set_profile(self, label: str, key: str, token: CandidateSubject) -> bool:
        try:
            ok = await self.client.set_profile(key, token.name, profile_description(token.symbol))
        except _CALL_ERRORS as e:
            logger.warning(f"{label} PROFILE error: {e}")
            return False
        logger.info(f"{label} PROFILE {'ok' if ok else 'failed'}")
        return ok

    async def _set_avatar(self, label: str, key: str, token: CandidateSubject) -> Optional[str]:
        if not token.image_uri:
            return None
        try:
            avatar_url = await self.client.set_avatar(key, token.image_uri)
        except _CALL_ERRORS as e:
            logger.warning(f"{label} AVATAR error: {e}")
            return None
        logger.info(f"{label} AVATAR {'ok' if avatar_url else 'failed'}")
        return avatar_url
