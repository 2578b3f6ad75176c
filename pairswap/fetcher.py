"""Building tokens and pairs from on-chain data.

A ChainDataSource answers the two questions pricing needs from a chain:
token decimals and pair reserves. StaticChainDataSource serves fixed
tables (tests, offline use); Web3ChainDataSource issues eth_calls.
Fetcher validates the answers and caches decimals, which never change
for a deployed token.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Mapping
from typing import Any, Protocol

import structlog
from pydantic import ValidationError

from pairswap.config import DEFAULT_CACHE_CONFIG, CacheConfig
from pairswap.constants import ChainId, LiquidityProvider
from pairswap.entities.fractions.token_amount import TokenAmount
from pairswap.entities.pair import Pair
from pairswap.entities.token import Token
from pairswap.errors import ChainMismatchError, DataSourceError
from pairswap.models.chain_data import ReservesData, TokenData
from pairswap.models.types import normalize_address, validate_and_parse_address

logger = structlog.get_logger()

# Tokens whose decimals() call is broken or non-standard
KNOWN_DECIMALS: dict[tuple[int, str], int] = {
    (ChainId.MAINNET, "0xe0b7927c4af23765cb51314a0e0521a9645f0e2a"): 9,  # DGD
}


class ChainDataSource(Protocol):
    """Protocol for sources of token and pair state.

    Allows swapping between an RPC-backed source and static tables for testing.
    """

    def get_decimals(self, chain_id: int, address: str) -> int:
        """Return the ERC20 decimals() of a token."""
        ...

    def get_reserves(self, chain_id: int, pair_address: str) -> tuple[int, int]:
        """Return (reserve0, reserve1) from a pair's getReserves()."""
        ...


class StaticChainDataSource:
    """In-memory data source.

    Configure with decimals and reserves tables keyed by (chain_id, address),
    and track calls for assertions.
    """

    def __init__(
        self,
        decimals: Mapping[tuple[int, str], int] | None = None,
        reserves: Mapping[tuple[int, str], tuple[int, int]] | None = None,
    ):
        self.decimals = {
            (chain_id, normalize_address(address)): value
            for (chain_id, address), value in (decimals or {}).items()
        }
        self.reserves = {
            (chain_id, normalize_address(address)): value
            for (chain_id, address), value in (reserves or {}).items()
        }
        self.calls: list[tuple[str, int, str]] = []  # (method, chain_id, address)

    def get_decimals(self, chain_id: int, address: str) -> int:
        self.calls.append(("get_decimals", chain_id, address))
        return self.decimals[(chain_id, normalize_address(address))]

    def get_reserves(self, chain_id: int, pair_address: str) -> tuple[int, int]:
        self.calls.append(("get_reserves", chain_id, pair_address))
        return self.reserves[(chain_id, normalize_address(pair_address))]


# Minimal ABIs, just the functions we call
ERC20_DECIMALS_ABI = [
    {
        "name": "decimals",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
    },
]

PAIR_RESERVES_ABI = [
    {
        "name": "getReserves",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "_reserve0", "type": "uint112"},
            {"name": "_reserve1", "type": "uint112"},
            {"name": "_blockTimestampLast", "type": "uint32"},
        ],
    },
]


class Web3ChainDataSource:
    """Data source that calls token and pair contracts via RPC."""

    def __init__(self, rpc_urls: Mapping[int, str]):
        """Initialize with one HTTP RPC URL per chain.

        Args:
            rpc_urls: chain_id -> RPC URL (e.g., {1: "https://eth.llamarpc.com"})
        """
        try:
            from web3 import Web3
        except ImportError as e:
            raise ImportError(
                "web3 package required for Web3ChainDataSource. Install with: pip install web3"
            ) from e

        self._web3_cls = Web3
        self.clients = {
            chain_id: Web3(Web3.HTTPProvider(url)) for chain_id, url in rpc_urls.items()
        }

    def _contract(self, chain_id: int, address: str, abi: list[dict[str, Any]]) -> Any:
        client = self.clients.get(chain_id)
        if client is None:
            raise DataSourceError(f"No RPC URL configured for chain {chain_id}")
        return client.eth.contract(address=self._web3_cls.to_checksum_address(address), abi=abi)

    def get_decimals(self, chain_id: int, address: str) -> int:
        contract = self._contract(chain_id, address, ERC20_DECIMALS_ABI)
        return int(contract.functions.decimals().call())

    def get_reserves(self, chain_id: int, pair_address: str) -> tuple[int, int]:
        contract = self._contract(chain_id, pair_address, PAIR_RESERVES_ABI)
        # (reserve0, reserve1, blockTimestampLast)
        result = contract.functions.getReserves().call()
        return int(result[0]), int(result[1])


class DecimalsCache:
    """Thread-safe cache of token decimals.

    Fetched entries expire after ttl_seconds (0 disables caching them).
    Seeded entries never expire and take precedence over fetched ones;
    invalidate() and clear() only drop fetched entries.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_CACHE_CONFIG.decimals_ttl_seconds,
        seed: Mapping[tuple[int, str], int] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds cannot be negative, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._seeded = {
            (chain_id, normalize_address(address)): decimals
            for (chain_id, address), decimals in (KNOWN_DECIMALS if seed is None else seed).items()
        }
        # (chain_id, address) -> (decimals, expires_at)
        self._entries: dict[tuple[int, str], tuple[int, float]] = {}

    @classmethod
    def from_config(cls, config: CacheConfig = DEFAULT_CACHE_CONFIG) -> DecimalsCache:
        return cls(ttl_seconds=config.decimals_ttl_seconds)

    def get(self, chain_id: int, address: str) -> int | None:
        key = (chain_id, normalize_address(address))
        with self._lock:
            if key in self._seeded:
                return self._seeded[key]
            entry = self._entries.get(key)
            if entry is None:
                return None
            decimals, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return decimals

    def set(self, chain_id: int, address: str, decimals: int) -> None:
        if self.ttl_seconds == 0:
            return
        key = (chain_id, normalize_address(address))
        with self._lock:
            self._entries[key] = (decimals, self._clock() + self.ttl_seconds)

    def invalidate(self, chain_id: int | None = None, address: str | None = None) -> int:
        """Drop fetched entries matching the given chain and/or address.

        With no arguments every fetched entry is dropped.

        Returns:
            Number of entries removed
        """
        address_key = normalize_address(address) if address is not None else None
        with self._lock:
            doomed = [
                key
                for key in self._entries
                if (chain_id is None or key[0] == chain_id)
                and (address_key is None or key[1] == address_key)
            ]
            for key in doomed:
                del self._entries[key]
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._seeded) + len(self._entries)


class Fetcher:
    """Constructs Token and Pair instances from a chain data source."""

    def __init__(self, source: ChainDataSource, cache: DecimalsCache | None = None):
        self.source = source
        self.cache = cache if cache is not None else DecimalsCache()

    def _call(self, method: str, chain_id: int, address: str) -> Any:
        try:
            return getattr(self.source, method)(chain_id, address)
        except DataSourceError:
            raise
        except Exception as e:
            logger.warning(
                "chain_data_fetch_failed",
                method=method,
                chain_id=chain_id,
                address=address,
                error=str(e),
            )
            raise DataSourceError(f"{method} failed for {address} on chain {chain_id}") from e

    def fetch_token_data(
        self,
        chain_id: int,
        address: str,
        symbol: str | None = None,
        name: str | None = None,
    ) -> Token:
        """Build a Token, fetching decimals unless cached.

        Raises:
            AddressValidationError: If address is invalid
            DataSourceError: If the source fails or returns invalid decimals
        """
        address = validate_and_parse_address(address)
        decimals = self.cache.get(chain_id, address)
        if decimals is not None:
            logger.debug("decimals_cache_hit", chain_id=chain_id, address=address)
        else:
            logger.debug("decimals_cache_miss", chain_id=chain_id, address=address)
            raw = self._call("get_decimals", chain_id, address)
            try:
                data = TokenData(chain_id=chain_id, address=address, decimals=raw)
            except ValidationError as e:
                raise DataSourceError(f"Invalid decimals {raw!r} for {address}") from e
            decimals = data.decimals
            self.cache.set(chain_id, address, decimals)
            logger.info(
                "token_data_fetched", chain_id=chain_id, address=address, decimals=decimals
            )
        return Token(chain_id, address, decimals, symbol, name)

    def fetch_pair_data(
        self,
        token_a: Token,
        token_b: Token,
        provider: LiquidityProvider = LiquidityProvider.UNISWAP,
    ) -> Pair:
        """Build a Pair from the current reserves of the tokens' pool.

        Raises:
            ChainMismatchError: If the tokens are on different chains
            DeploymentUnavailableError: If the provider has no deployment on the chain
            DataSourceError: If the source fails or returns invalid reserves
        """
        if token_a.chain_id != token_b.chain_id:
            raise ChainMismatchError(
                f"Tokens are on different chains: {token_a.chain_id} vs {token_b.chain_id}"
            )
        address = Pair.get_address(token_a, token_b, provider)
        raw = self._call("get_reserves", token_a.chain_id, address)
        try:
            data = ReservesData(pair_address=address, reserve0=raw[0], reserve1=raw[1])
        except (ValidationError, IndexError, TypeError) as e:
            raise DataSourceError(f"Invalid reserves {raw!r} for pair {address}") from e

        logger.info(
            "pair_data_fetched",
            chain_id=token_a.chain_id,
            pair=address,
            provider=provider.name,
            reserve0=data.reserve0,
            reserve1=data.reserve1,
        )
        if token_a.sorts_before(token_b):
            balance_a, balance_b = data.reserve0, data.reserve1
        else:
            balance_a, balance_b = data.reserve1, data.reserve0
        return Pair(TokenAmount(token_a, balance_a), TokenAmount(token_b, balance_b), provider)


__all__ = [
    "ChainDataSource",
    "DecimalsCache",
    "Fetcher",
    "KNOWN_DECIMALS",
    "StaticChainDataSource",
    "Web3ChainDataSource",
]
