"""Best-trade search over a set of pairs.

Enumerates routes depth-first, simulating each candidate hop as it goes,
and keeps the best trades in a bounded list ordered by trade_comparator.
Each pair appears at most once per route; tokens may be revisited. Every
branch works on its own tuple of remaining pairs and its own route prefix,
so branches share no mutable state apart from the result list.

With an executor, each first-hop pair is searched as an independent task
with its own result list, and the partial lists are merged in pair order.
Merging in that order reproduces the tie-breaking of the sequential search.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import Executor
from functools import partial

import structlog

from pairswap.config import DEFAULT_SEARCH_CONFIG, SearchConfig
from pairswap.constants import TradeType
from pairswap.entities.fractions.token_amount import TokenAmount
from pairswap.entities.pair import Pair
from pairswap.entities.route import Route
from pairswap.entities.token import Token
from pairswap.entities.trade import Trade, trade_comparator
from pairswap.errors import InsufficientInputAmountError, InsufficientReservesError
from pairswap.math.sorted_list import BoundedSortedList

logger = structlog.get_logger()

# Quote failures that make a branch infeasible rather than the search invalid
_PRUNED_ERRORS = (InsufficientInputAmountError, InsufficientReservesError)

Step = Callable[[int, BoundedSortedList[Trade]], None]


def _has_empty_reserve(pair: Pair) -> bool:
    return pair.reserve0.raw == 0 or pair.reserve1.raw == 0


def _step_exact_in(
    pairs: tuple[Pair, ...],
    index: int,
    best: BoundedSortedList[Trade],
    amount_in: TokenAmount,
    token_out: Token,
    max_hops: int,
    route_prefix: tuple[Pair, ...],
    original_amount_in: TokenAmount,
) -> None:
    pair = pairs[index]
    if not pair.involves_token(amount_in.token) or _has_empty_reserve(pair):
        return
    try:
        amount_out, _ = pair.get_output_amount(amount_in)
    except _PRUNED_ERRORS:
        return

    route_pairs = route_prefix + (pair,)
    if amount_out.token == token_out:
        route = Route(route_pairs, original_amount_in.token, token_out)
        best.insert(Trade(route, original_amount_in, TradeType.EXACT_INPUT))
    elif max_hops > 1 and len(pairs) > 1:
        remaining = pairs[:index] + pairs[index + 1 :]
        for next_index in range(len(remaining)):
            _step_exact_in(
                remaining,
                next_index,
                best,
                amount_out,
                token_out,
                max_hops - 1,
                route_pairs,
                original_amount_in,
            )


def _step_exact_out(
    pairs: tuple[Pair, ...],
    index: int,
    best: BoundedSortedList[Trade],
    token_in: Token,
    amount_out: TokenAmount,
    max_hops: int,
    route_suffix: tuple[Pair, ...],
    original_amount_out: TokenAmount,
) -> None:
    pair = pairs[index]
    if not pair.involves_token(amount_out.token) or _has_empty_reserve(pair):
        return
    try:
        amount_in, _ = pair.get_input_amount(amount_out)
    except _PRUNED_ERRORS:
        return

    route_pairs = (pair,) + route_suffix
    if amount_in.token == token_in:
        route = Route(route_pairs, token_in, original_amount_out.token)
        best.insert(Trade(route, original_amount_out, TradeType.EXACT_OUTPUT))
    elif max_hops > 1 and len(pairs) > 1:
        remaining = pairs[:index] + pairs[index + 1 :]
        for next_index in range(len(remaining)):
            _step_exact_out(
                remaining,
                next_index,
                best,
                token_in,
                amount_in,
                max_hops - 1,
                route_pairs,
                original_amount_out,
            )


def _collect(step: Step, index: int, max_num_results: int) -> list[Trade]:
    partial_best: BoundedSortedList[Trade] = BoundedSortedList(max_num_results, trade_comparator)
    step(index, partial_best)
    return partial_best.to_list()


def _run_search(
    step: Step,
    num_pairs: int,
    max_num_results: int,
    executor: Executor | None,
) -> BoundedSortedList[Trade]:
    best: BoundedSortedList[Trade] = BoundedSortedList(max_num_results, trade_comparator)
    if executor is None:
        for index in range(num_pairs):
            step(index, best)
        return best

    logger.debug("best_trade_search_parallel", tasks=num_pairs)
    futures = [
        executor.submit(_collect, step, index, max_num_results) for index in range(num_pairs)
    ]
    for future in futures:
        best.merge(future.result())
    return best


def _resolve_limits(
    max_num_results: int | None, max_hops: int | None, config: SearchConfig
) -> tuple[int, int]:
    num_results = config.max_num_results if max_num_results is None else max_num_results
    hops = config.max_hops if max_hops is None else max_hops
    if num_results <= 0:
        raise ValueError(f"max_num_results must be positive, got {num_results}")
    if hops <= 0:
        raise ValueError(f"max_hops must be positive, got {hops}")
    return num_results, hops


def best_trade_exact_in(
    pairs: Sequence[Pair],
    amount_in: TokenAmount,
    token_out: Token,
    max_num_results: int | None = None,
    max_hops: int | None = None,
    executor: Executor | None = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> list[Trade]:
    """Find the best trades selling exactly amount_in for token_out.

    Args:
        pairs: Candidate pairs (each used at most once per route)
        amount_in: Exact amount to sell
        token_out: Token to buy
        max_num_results: Number of trades to return (default: config.max_num_results)
        max_hops: Maximum pairs per route (default: config.max_hops)
        executor: Optional executor to search first hops concurrently
        config: Source of default limits

    Returns:
        Up to max_num_results trades, best first. Empty if no route exists.

    Raises:
        ValueError: If max_num_results or max_hops is not positive
    """
    num_results, hops = _resolve_limits(max_num_results, max_hops, config)
    pairs = tuple(pairs)
    step = partial(
        _step_exact_in,
        pairs,
        amount_in=amount_in,
        token_out=token_out,
        max_hops=hops,
        route_prefix=(),
        original_amount_in=amount_in,
    )
    best = _run_search(step, len(pairs), num_results, executor)
    logger.debug(
        "best_trade_search_completed",
        trade_type=TradeType.EXACT_INPUT.name,
        pairs=len(pairs),
        max_hops=hops,
        results=len(best),
    )
    return best.to_list()


def best_trade_exact_out(
    pairs: Sequence[Pair],
    token_in: Token,
    amount_out: TokenAmount,
    max_num_results: int | None = None,
    max_hops: int | None = None,
    executor: Executor | None = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> list[Trade]:
    """Find the best trades buying exactly amount_out with token_in.

    Routes are built backwards from the output token; see
    best_trade_exact_in for the meaning of the limits.

    Raises:
        ValueError: If max_num_results or max_hops is not positive
    """
    num_results, hops = _resolve_limits(max_num_results, max_hops, config)
    pairs = tuple(pairs)
    step = partial(
        _step_exact_out,
        pairs,
        token_in=token_in,
        amount_out=amount_out,
        max_hops=hops,
        route_suffix=(),
        original_amount_out=amount_out,
    )
    best = _run_search(step, len(pairs), num_results, executor)
    logger.debug(
        "best_trade_search_completed",
        trade_type=TradeType.EXACT_OUTPUT.name,
        pairs=len(pairs),
        max_hops=hops,
        results=len(best),
    )
    return best.to_list()


__all__ = ["best_trade_exact_in", "best_trade_exact_out"]
