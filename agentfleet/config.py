"""
Configuration management for Agent Fleet.

Configuration is built once at process start, either from environment
variables or from a YAML file with environment variable expansion, and
passed explicitly into each workflow.
"""

import os
import re
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Mapping

import yaml

from .errors import ConfigError


MARKET_TABS = ("all", "live", "new", "graduated")

DEFAULT_API_BASE = "https://api.pump.studio"


@dataclass
class ClientConfig:
    """Remote service connection settings."""
    base_url: str = DEFAULT_API_BASE
    timeout: float = 30.0


@dataclass
class SpawnConfig:
    """Agent spawner settings."""
    count: int = 5
    tab: str = "all"
    offset: int = 30  # skip the most prominent tokens


@dataclass
class RankConfig:
    """Rank-all rotation settings."""
    count: int = 3  # tokens per agent per run
    tab: str = "all"
    self_key: Optional[str] = None
    self_name: str = "self"


@dataclass
class PacingConfig:
    """Fixed delays between remote calls, in seconds."""
    submission_cooldown: float = 65.0
    participant_delay: float = 5.0
    candidate_delay: float = 3.0
    failure_delay: float = 2.0


@dataclass
class FleetConfig:
    """Root configuration for Agent Fleet."""
    agents_file: str = "./agents.json"
    client: ClientConfig = field(default_factory=ClientConfig)
    spawn: SpawnConfig = field(default_factory=SpawnConfig)
    rank: RankConfig = field(default_factory=RankConfig)
    pacing: PacingConfig = field(default_factory=PacingConfig)

    @classmethod
    def from_env(cls, env: Mapping[str, str] = None) -> "FleetConfig":
        """Load config from environment variables."""
        env = os.environ if env is None else env

        cooldown_ms = _int(env.get("COOLDOWN_MS"), 65_000, minimum=0)

        config = cls(
            agents_file=env.get("AGENTS_FILE") or "./agents.json",
            client=ClientConfig(
                base_url=env.get("PUMP_API_BASE") or DEFAULT_API_BASE,
                timeout=_float(env.get("PUMP_API_TIMEOUT"), 30.0),
            ),
            spawn=SpawnConfig(
                count=_int(env.get("SPAWN_COUNT"), 5, minimum=1),
                tab=env.get("SPAWN_TAB") or "all",
                offset=_int(env.get("SPAWN_OFFSET"), 30, minimum=0),
            ),
            rank=RankConfig(
                count=_int(env.get("RANK_COUNT"), 3, minimum=1),
                tab=env.get("RANK_TAB") or "all",
                self_key=env.get("PUMP_STUDIO_API_KEY") or None,
                self_name=env.get("SELF_AGENT_NAME") or "self",
            ),
            pacing=PacingConfig(submission_cooldown=cooldown_ms / 1000),
        )
        config.validate()
        return config

    def validate(self):
        """Raise ConfigError on values the workflows cannot use."""
        for name, tab in (("spawn.tab", self.spawn.tab), ("rank.tab", self.rank.tab)):
            if tab not in MARKET_TABS:
                raise ConfigError(f"{name} must be one of {', '.join(MARKET_TABS)} (got {tab!r})")
        if self.spawn.count < 1 or self.rank.count < 1:
            raise ConfigError("spawn.count and rank.count must be positive")
        if self.spawn.offset < 0:
            raise ConfigError("spawn.offset must not be negative")
        for name, value in vars(self.pacing).items():
            if value < 0:
                raise ConfigError(f"pacing.{name} must not be negative")


def _int(raw: Optional[str], default: int, minimum: int) -> int:
    """Parse an integer env value, falling back to the default when unusable."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= minimum else default


def _float(raw: Optional[str], default: float) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values."""
    if isinstance(value, str):
        # Match ${VAR} or $VAR patterns
        pattern = r'\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)'

        def replace(match):
            var_name = match.group(1) or match.group(2)
            return os.environ.get(var_name, match.group(0))

        return re.sub(pattern, replace, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(v) for v in value]
    return value


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return section


def load_config(path: str | Path) -> FleetConfig:
    """Load configuration from YAML file."""
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    # Expand environment variables
    data = expand_env_vars(raw)

    try:
        client_data = _section(data, "client")
        client = ClientConfig(
            base_url=client_data.get("base_url", DEFAULT_API_BASE),
            timeout=float(client_data.get("timeout", 30.0)),
        )

        spawn_data = _section(data, "spawn")
        spawn = SpawnConfig(
            count=int(spawn_data.get("count", 5)),
            tab=spawn_data.get("tab", "all"),
            offset=int(spawn_data.get("offset", 30)),
        )

        rank_data = _section(data, "rank")
        self_key = rank_data.get("self_key")
        # Unset ${VAR} references survive expansion verbatim
        if not self_key or "${" in str(self_key):
            self_key = None
        rank = RankConfig(
            count=int(rank_data.get("count", 3)),
            tab=rank_data.get("tab", "all"),
            self_key=self_key,
            self_name=rank_data.get("self_name", "self"),
        )

        pacing_data = _section(data, "pacing")
        pacing = PacingConfig(
            submission_cooldown=float(pacing_data.get("submission_cooldown", 65.0)),
            participant_delay=float(pacing_data.get("participant_delay", 5.0)),
            candidate_delay=float(pacing_data.get("candidate_delay", 3.0)),
            failure_delay=float(pacing_data.get("failure_delay", 2.0)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in {path}: {e}") from e

    config = FleetConfig(
        agents_file=data.get("agents_file", "./agents.json"),
        client=client,
        spawn=spawn,
        rank=rank,
        pacing=pacing,
    )
    config.validate()
    return config


def create_default_config() -> str:
    """Generate default configuration YAML."""
    return """# Agent Fleet Configuration

# Registry of spawned agents (rewritten in full after every spawn)
agents_file: ./agents.json

client:
  base_url: https://api.pump.studio
  timeout: 30

# Agent spawner
spawn:
  count: 5
  tab: all        # all | live | new | graduated
  offset: 30      # skip the top N tokens to favour obscure ones

# Rank-all rotation
rank:
  count: 3        # tokens per agent per run
  tab: all
  self_key: ${PUMP_STUDIO_API_KEY}
  self_name: self

# Fixed pauses between remote calls (seconds)
pacing:
  submission_cooldown: 65
  participant_delay: 5
  candidate_delay: 3
  failure_delay: 2
"""
