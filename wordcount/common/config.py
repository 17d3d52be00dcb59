"""
Engine configuration.
Resolves the degree of parallelism from an explicit value, the environment,
or the hardware hint reported by psutil.
"""

import os
import logging
import psutil
from dataclasses import dataclass
from typing import Optional

from wordcount.common.errors import ConfigurationError

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

ENV_PARALLELISM = "WORDCOUNT_PARALLELISM"
ENV_SHARDS = "WORDCOUNT_SHARDS"
ENV_KEEP_EMPTY = "WORDCOUNT_KEEP_EMPTY_TOKENS"

# Used when the hardware hint is unavailable
DEFAULT_PARALLELISM = 1


def detect_parallelism() -> int:
    """Return the number of logical CPUs, or 0 if it cannot be determined."""
    count = psutil.cpu_count(logical=True)
    return count or 0


def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def _env_bool(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


@dataclass
class EngineConfig:
    """Settings for a single word count run"""

    parallelism: Optional[int] = None   # None means use the hardware hint
    coerce_parallelism: bool = True     # 0 becomes 1 instead of failing
    num_shards: int = 1                 # 1 is a single coarse lock
    keep_empty_tokens: bool = False

    def __post_init__(self):
        if self.num_shards < 1:
            raise ConfigurationError(f"num_shards must be >= 1, got {self.num_shards}")

    @classmethod
    def from_env(cls, **overrides) -> "EngineConfig":
        """Build a config from WORDCOUNT_* environment variables.

        Keyword arguments that are not None take precedence over the
        environment.
        """
        shards = _env_int(ENV_SHARDS)
        values = {
            'parallelism': _env_int(ENV_PARALLELISM),
            'num_shards': 1 if shards is None else shards,
            'keep_empty_tokens': _env_bool(ENV_KEEP_EMPTY),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def resolve_parallelism(self) -> int:
        """
        Determine how many map workers to start.

        Returns:
            Worker count, always >= 1

        Raises:
            ConfigurationError: If the value is negative, or resolves to 0
                while coercion is disabled
        """
        if self.parallelism is None:
            workers = detect_parallelism()
            source = "hardware"
        else:
            workers = self.parallelism
            source = "configured"

        if workers < 0:
            raise ConfigurationError(f"Degree of parallelism must be >= 0, got {workers}")

        if workers == 0:
            if not self.coerce_parallelism:
                raise ConfigurationError(
                    f"Degree of parallelism resolved to 0 ({source}) and coercion is disabled"
                )
            logger.warning(
                f"Degree of parallelism resolved to 0 ({source}); "
                f"falling back to {DEFAULT_PARALLELISM}"
            )
            workers = DEFAULT_PARALLELISM

        logger.debug(f"Using {workers} map worker(s) ({source})")
        return workers


def setup_logging(level: str = "INFO"):
    """Configure root logging the same way for every entry point."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
