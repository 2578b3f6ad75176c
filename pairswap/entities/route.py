"""Chains of pairs from an input token to an output token."""

from __future__ import annotations

from collections.abc import Sequence

from pairswap.entities.fractions.price import Price
from pairswap.entities.pair import Pair
from pairswap.entities.token import Token
from pairswap.errors import ChainMismatchError, InvalidRouteError


class Route:
    """An ordered, contiguous sequence of pairs.

    Attributes:
        pairs: Pairs traversed in order
        input_token: Token sold into the first pair
        output_token: Token received from the last pair
        path: Tokens visited, len(pairs) + 1 long
        mid_price: Product of each hop's spot price (output per input)
    """

    __slots__ = ("_pairs", "_path", "_mid_price")

    def __init__(
        self,
        pairs: Sequence[Pair],
        input_token: Token,
        output_token: Token | None = None,
    ) -> None:
        """Validate the pairs and derive the token path and mid price.

        Raises:
            InvalidRouteError: If pairs is empty, does not start at input_token,
                is not contiguous, repeats a pair or does not end at output_token
            ChainMismatchError: If the pairs span more than one chain
        """
        pairs = tuple(pairs)
        if not pairs:
            raise InvalidRouteError("Route needs at least one pair")
        chain_id = pairs[0].chain_id
        if any(pair.chain_id != chain_id for pair in pairs):
            raise ChainMismatchError("All pairs in a route must be on the same chain")
        if not pairs[0].involves_token(input_token):
            raise InvalidRouteError(f"First pair does not hold input token {input_token!r}")
        if output_token is not None and not pairs[-1].involves_token(output_token):
            raise InvalidRouteError(f"Last pair does not hold output token {output_token!r}")

        seen_pools: set[str] = set()
        path = [input_token]
        for pair in pairs:
            pool = pair.liquidity_token.address
            if pool in seen_pools:
                raise InvalidRouteError(f"Pair {pair!r} appears more than once")
            seen_pools.add(pool)
            current = path[-1]
            if not pair.involves_token(current):
                raise InvalidRouteError(f"Pair {pair!r} does not continue from {current!r}")
            path.append(pair.other_token(current))

        if output_token is not None and path[-1] != output_token:
            raise InvalidRouteError(f"Route ends at {path[-1]!r}, not {output_token!r}")

        self._pairs = pairs
        self._path = tuple(path)
        self._mid_price = self._compute_mid_price()

    def _compute_mid_price(self) -> Price:
        price = self._pairs[0].price_of(self._path[0])
        for pair, token in zip(self._pairs[1:], self._path[1:-1]):
            price = price.multiply(pair.price_of(token))
        return price  # type: ignore[return-value]

    @property
    def pairs(self) -> tuple[Pair, ...]:
        return self._pairs

    @property
    def path(self) -> tuple[Token, ...]:
        return self._path

    @property
    def input_token(self) -> Token:
        return self._path[0]

    @property
    def output_token(self) -> Token:
        return self._path[-1]

    @property
    def mid_price(self) -> Price:
        return self._mid_price

    @property
    def chain_id(self) -> int:
        return self._pairs[0].chain_id

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        hops = " -> ".join(token.symbol or token.address for token in self._path)
        return f"Route({hops})"


__all__ = ["Route"]
