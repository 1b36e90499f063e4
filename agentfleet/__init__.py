"""
Agent Fleet - Rotating Agent Pool for pump.studio

Two workflows share one agent registry:
1. Spawn - register new agents named after obscure tokens
2. Rank  - rotate through every agent, submitting token analyses
"""

__version__ = "0.1.0"

from .config import FleetConfig, load_config

__all__ = [
    "__version__",
    "FleetConfig",
    "load_config",
]
