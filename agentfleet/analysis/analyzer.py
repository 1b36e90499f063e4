"""
Default token analyzer.

Scores a data point from momentum, order flow, liquidity depth and holder
concentration. Any callable taking a DataPoint and returning an Analysis
can replace it in the rotator.
"""

from typing import Optional, Dict, Any

from ..client.models import Analysis, DataPoint

BULLISH_THRESHOLD = 60
BEARISH_THRESHOLD = 40


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _ratio(numerator: Optional[float], denominator: Optional[float]) -> Optional[float]:
    if numerator is None or not denominator:
        return None
    return numerator / denominator


def compute_quant(dp: DataPoint) -> Dict[str, Any]:
    """Derived metrics used for scoring; all optional."""
    trades = (dp.buys_24h or 0) + (dp.sells_24h or 0)
    return {
        "buy_ratio": _ratio(dp.buys_24h, trades) if trades else None,
        "liquidity_to_mcap": _ratio(dp.liquidity_usd, dp.usd_market_cap),
        "volume_to_mcap": _ratio(dp.volume_24h, dp.usd_market_cap),
        "momentum": _momentum(dp),
        "trades_24h": trades,
    }


def _momentum(dp: DataPoint) -> Optional[float]:
    # Short windows weigh more; a token moves fast or not at all
    weighted = [
        (dp.price_change_5m, 0.2),
        (dp.price_change_1h, 0.3),
        (dp.price_change_24h, 0.5),
    ]
    present = [(v, w) for v, w in weighted if v is not None]
    if not present:
        return None
    total_weight = sum(w for _, w in present)
    return sum(v * w for v, w in present) / total_weight


def score_quant(quant: Dict[str, Any], top10_holder_pct: Optional[float]) -> int:
    score = 50.0

    momentum = quant["momentum"]
    if momentum is not None:
        score += _clamp(momentum, -50, 50) * 0.4

    buy_ratio = quant["buy_ratio"]
    if buy_ratio is not None:
        score += (buy_ratio - 0.5) * 40

    liquidity = quant["liquidity_to_mcap"]
    if liquidity is not None:
        score += _clamp((liquidity - 0.1) * 50, -10, 10)

    turnover = quant["volume_to_mcap"]
    if turnover is not None and turnover > 3:
        score -= 5  # wash-trading territory

    if top10_holder_pct is not None and top10_holder_pct > 50:
        score -= _clamp((top10_holder_pct - 50) / 2, 0, 15)

    return int(round(_clamp(score, 0, 100)))


def _fmt_pct(value: Optional[float]) -> str:
    return "n/a" if value is None else f"{value:+.1f}%"


def analyze(dp: DataPoint) -> Analysis:
    """Turn a data point into sentiment, score and summary."""
    quant = compute_quant(dp)
    score = score_quant(quant, dp.top10_holder_pct)

    if score >= BULLISH_THRESHOLD:
        sentiment = "bullish"
    elif score <= BEARISH_THRESHOLD:
        sentiment = "bearish"
    else:
        sentiment = "neutral"

    label = dp.symbol or dp.mint[:6]
    parts = [f"${label} {sentiment} ({score}/100)"]
    parts.append(f"1h {_fmt_pct(dp.price_change_1h)}, 24h {_fmt_pct(dp.price_change_24h)}")
    if quant["buy_ratio"] is not None:
        parts.append(f"buys {quant['buy_ratio'] * 100:.0f}% of {quant['trades_24h']} trades")
    if dp.top10_holder_pct is not None:
        parts.append(f"top10 hold {dp.top10_holder_pct:.0f}%")

    snapshot = {
        "price_usd": dp.price_usd,
        "usd_market_cap": dp.usd_market_cap,
        "liquidity_usd": dp.liquidity_usd,
        "volume_24h": dp.volume_24h,
        "holders": dp.holders,
    }

    return Analysis(
        sentiment=sentiment,
        score=score,
        summary="; ".join(parts),
        snapshot=snapshot,
        quant=quant,
    )
