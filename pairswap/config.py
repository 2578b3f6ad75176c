"""Runtime configuration for trade search and data-source caching."""

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from err


@dataclass(frozen=True)
class SearchConfig:
    """Bounds for best-trade enumeration.

    Attributes:
        max_hops: Maximum number of pairs in a candidate route (default: 3)
        max_num_results: Maximum number of trades returned (default: 3)
    """

    max_hops: int = 3
    max_num_results: int = 3

    def __post_init__(self) -> None:
        if self.max_hops <= 0:
            raise ValueError(f"max_hops must be positive, got {self.max_hops}")
        if self.max_num_results <= 0:
            raise ValueError(f"max_num_results must be positive, got {self.max_num_results}")

    @classmethod
    def from_env(cls) -> "SearchConfig":
        """Build from PAIRSWAP_MAX_HOPS / PAIRSWAP_MAX_NUM_RESULTS."""
        return cls(
            max_hops=_env_int("PAIRSWAP_MAX_HOPS", cls.max_hops),
            max_num_results=_env_int("PAIRSWAP_MAX_NUM_RESULTS", cls.max_num_results),
        )


@dataclass(frozen=True)
class CacheConfig:
    """Configuration for the token decimals cache.

    Attributes:
        decimals_ttl_seconds: Lifetime of a fetched decimals entry. Zero
            disables caching of fetched values; seeded entries never expire.
    """

    decimals_ttl_seconds: int = 3600

    def __post_init__(self) -> None:
        if self.decimals_ttl_seconds < 0:
            raise ValueError(
                f"decimals_ttl_seconds cannot be negative, got {self.decimals_ttl_seconds}"
            )

    @classmethod
    def from_env(cls) -> "CacheConfig":
        """Build from PAIRSWAP_DECIMALS_TTL_SECONDS."""
        return cls(
            decimals_ttl_seconds=_env_int(
                "PAIRSWAP_DECIMALS_TTL_SECONDS", cls.decimals_ttl_seconds
            ),
        )


# Default configuration instances
DEFAULT_SEARCH_CONFIG = SearchConfig()
DEFAULT_CACHE_CONFIG = CacheConfig()

__all__ = [
    "SearchConfig",
    "CacheConfig",
    "DEFAULT_SEARCH_CONFIG",
    "DEFAULT_CACHE_CONFIG",
]
