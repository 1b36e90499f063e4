"""
Remote payload models.

Responses from the service are validated into these before anything else
sees them.
"""

from typing import Optional, Dict, Any, Literal
from pydantic import BaseModel, ConfigDict, Field

Sentiment = Literal["bullish", "bearish", "neutral"]


class CandidateSubject(BaseModel):
    """A token as returned by the market listing."""
    model_config = ConfigDict(extra="ignore")

    mint: str
    name: str
    symbol: str
    image_uri: Optional[str] = None
    usd_market_cap: Optional[float] = None

    @property
    def has_image(self) -> bool:
        """True when the image reference looks fetchable."""
        return bool(self.image_uri) and self.image_uri.startswith("http")


MarketToken = CandidateSubject


class Registration(BaseModel):
    """Result of a key registration call."""
    key: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return bool(self.key)


class DataPoint(BaseModel):
    """Market data for one token, as served by the data-point endpoint."""
    model_config = ConfigDict(extra="allow")

    mint: str
    name: str = ""
    symbol: str = ""
    price_usd: Optional[float] = None
    usd_market_cap: Optional[float] = None
    liquidity_usd: Optional[float] = None
    volume_24h: Optional[float] = None
    price_change_5m: Optional[float] = None
    price_change_1h: Optional[float] = None
    price_change_24h: Optional[float] = None
    buys_24h: Optional[int] = None
    sells_24h: Optional[int] = None
    holders: Optional[int] = None
    top10_holder_pct: Optional[float] = None


class Analysis(BaseModel):
    """Output of the analysis step for one data point."""
    sentiment: Sentiment
    score: int = Field(..., ge=0, le=100)
    summary: str
    snapshot: Dict[str, Any] = Field(default_factory=dict)
    quant: Dict[str, Any] = Field(default_factory=dict)


class AnalysisSubmission(Analysis):
    """Payload of the submission call."""
    mint: str


class Submission(BaseModel):
    """Result of a submission call."""
    model_config = ConfigDict(populate_by_name=True)

    ok: bool
    xp_earned: float = Field(0, alias="xpEarned")
    error: Optional[str] = None
