"""
Spawn candidate discovery.

Turns a raw market listing into the shortlist of tokens that get a new agent.
"""

from typing import Iterable, List, Sequence

from .models import AgentRecord, CandidateSubject


def listing_limit(offset: int, count: int) -> int:
    """How many tokens to request so the filters still leave `count` behind."""
    return offset + count * 3


def select_candidates(
    tokens: Sequence[CandidateSubject],
    existing: Iterable[AgentRecord],
    offset: int,
    count: int,
) -> List[CandidateSubject]:
    """
    Pick up to `count` spawn candidates from a market listing.

    Steps, in this order:
      1. skip the first `offset` tokens (the most prominent ones)
      2. drop tokens whose mint already has an agent
      3. drop tokens whose name (case-insensitive) already has an agent
      4. drop tokens without an http(s) image
      5. keep the first `count` survivors

    Listing order is preserved. Same inputs, same output.
    """
    existing = list(existing)
    known_mints = {a.mint for a in existing}
    known_names = {a.name.lower() for a in existing}

    remaining = list(tokens)[max(offset, 0):]
    remaining = [t for t in remaining if t.mint not in known_mints]
    remaining = [t for t in remaining if t.name.lower() not in known_names]
    remaining = [t for t in remaining if t.has_image]
    return remaining[:max(count, 0)]
