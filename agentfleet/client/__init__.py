"""pump.studio API client and payload models."""

from .api import PumpStudioClient
from .models import (
    MarketToken, Registration, DataPoint,
    Analysis, AnalysisSubmission, Submission,
)

__all__ = [
    "PumpStudioClient",
    "MarketToken",
    "Registration",
    "DataPoint",
    "Analysis",
    "AnalysisSubmission",
    "Submission",
]
