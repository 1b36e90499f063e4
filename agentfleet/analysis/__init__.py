"""Token analysis used by the rank workflow."""

from .analyzer import analyze, compute_quant, score_quant

__all__ = ["analyze", "compute_quant", "score_quant"]
