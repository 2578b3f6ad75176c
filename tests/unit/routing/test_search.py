"""Tests for best-trade search."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from pairswap.config import SearchConfig
from pairswap.constants import TradeType
from pairswap.entities import TokenAmount
from pairswap.routing import best_trade_exact_in, best_trade_exact_out
from tests.helpers import make_pair


class TestBestTradeExactIn:
    def test_empty_pairs_gives_no_results(self, token0, token2):
        assert best_trade_exact_in([], TokenAmount(token0, 100), token2) == []

    def test_invalid_limits_raise(self, pair_0_2, token0, token2):
        with pytest.raises(ValueError):
            best_trade_exact_in([pair_0_2], TokenAmount(token0, 100), token2, max_hops=0)
        with pytest.raises(ValueError):
            best_trade_exact_in([pair_0_2], TokenAmount(token0, 100), token2, max_num_results=0)

    def test_finds_direct_and_two_hop(self, pair_0_1, pair_0_2, pair_1_2, token0, token1, token2):
        result = best_trade_exact_in(
            [pair_0_1, pair_0_2, pair_1_2], TokenAmount(token0, 100), token2
        )
        assert len(result) == 2
        assert result[0].route.pairs == (pair_0_2,)
        assert result[0].route.path == (token0, token2)
        assert result[0].input_amount.raw == 100
        assert result[0].output_amount.raw == 99
        assert result[1].route.pairs == (pair_0_1, pair_1_2)
        assert result[1].route.path == (token0, token1, token2)
        assert result[1].output_amount.raw == 69
        assert all(trade.trade_type == TradeType.EXACT_INPUT for trade in result)

    def test_single_pool_single_hop(self, pair_0_1, token0, token1):
        result = best_trade_exact_in(
            [pair_0_1], TokenAmount(token0, 100), token1, max_hops=1
        )
        assert len(result) == 1
        assert result[0].output_amount.token == token1
        assert result[0].output_amount.raw == (100 * 997 * 1000) // (1000 * 1000 + 100 * 997)
        assert result[0].output_amount.raw == 90

    def test_respects_max_hops(self, pair_0_1, pair_0_2, pair_1_2, token0, token2):
        result = best_trade_exact_in(
            [pair_0_1, pair_0_2, pair_1_2], TokenAmount(token0, 100), token2, max_hops=1
        )
        assert len(result) == 1
        assert result[0].route.pairs == (pair_0_2,)

    def test_prunes_insufficient_input(self, pair_0_1, pair_0_2, pair_1_2, token0, token2):
        """The two-hop branch quotes zero on its first hop."""
        result = best_trade_exact_in(
            [pair_0_1, pair_0_2, pair_1_2], TokenAmount(token0, 1), token2
        )
        assert len(result) == 1
        assert result[0].output_amount.raw == 1

    def test_respects_max_num_results(self, pair_0_1, pair_0_2, pair_1_2, token0, token2):
        result = best_trade_exact_in(
            [pair_0_1, pair_0_2, pair_1_2], TokenAmount(token0, 10), token2, max_num_results=1
        )
        assert len(result) == 1

    def test_no_path(self, pair_0_1, pair_0_3, pair_1_3, token0, token2):
        result = best_trade_exact_in(
            [pair_0_1, pair_0_3, pair_1_3], TokenAmount(token0, 10), token2
        )
        assert result == []

    def test_skips_empty_reserves(self, pair_0_2, token0, token1, token2):
        empty = make_pair(token0, 0, token1, 1000)
        result = best_trade_exact_in([empty, pair_0_2], TokenAmount(token0, 100), token2)
        assert len(result) == 1
        assert result[0].route.pairs == (pair_0_2,)

    def test_results_sorted_best_first(
        self, pair_0_1, pair_0_2, pair_0_3, pair_1_2, pair_1_3, token0, token2
    ):
        result = best_trade_exact_in(
            [pair_0_1, pair_0_2, pair_0_3, pair_1_2, pair_1_3], TokenAmount(token0, 100), token2
        )
        assert len(result) == 3
        outputs = [trade.output_amount.raw for trade in result]
        assert outputs == sorted(outputs, reverse=True)

    def test_no_pair_used_twice(
        self, pair_0_1, pair_0_2, pair_0_3, pair_1_2, pair_1_3, token0, token2
    ):
        result = best_trade_exact_in(
            [pair_0_1, pair_0_2, pair_0_3, pair_1_2, pair_1_3],
            TokenAmount(token0, 100),
            token2,
            max_num_results=10,
        )
        for trade in result:
            pools = [pair.liquidity_token.address for pair in trade.route.pairs]
            assert len(pools) == len(set(pools))

    def test_config_supplies_defaults(self, pair_0_1, pair_0_2, pair_1_2, token0, token2):
        result = best_trade_exact_in(
            [pair_0_1, pair_0_2, pair_1_2],
            TokenAmount(token0, 100),
            token2,
            config=SearchConfig(max_hops=1),
        )
        assert len(result) == 1


class TestBestTradeExactOut:
    def test_finds_direct_and_two_hop(self, pair_0_1, pair_0_2, pair_1_2, token0, token1, token2):
        result = best_trade_exact_out(
            [pair_0_1, pair_0_2, pair_1_2], token0, TokenAmount(token2, 100)
        )
        assert len(result) == 2
        assert result[0].route.pairs == (pair_0_2,)
        assert result[0].input_amount.raw == 101
        assert result[0].output_amount.raw == 100
        assert result[1].route.pairs == (pair_0_1, pair_1_2)
        assert result[1].route.path == (token0, token1, token2)
        assert result[1].input_amount.raw == 156
        assert all(trade.trade_type == TradeType.EXACT_OUTPUT for trade in result)

    def test_respects_max_hops(self, pair_0_1, pair_0_2, pair_1_2, token0, token2):
        result = best_trade_exact_out(
            [pair_0_1, pair_0_2, pair_1_2], token0, TokenAmount(token2, 10), max_hops=1
        )
        assert len(result) == 1

    def test_prunes_insufficient_reserves(self, pair_0_1, pair_0_2, pair_1_2, token0, token2):
        """Requesting 1200 of token2 exceeds every token2 reserve."""
        result = best_trade_exact_out(
            [pair_0_1, pair_0_2, pair_1_2], token0, TokenAmount(token2, 1200)
        )
        assert result == []

    def test_no_path(self, pair_0_1, pair_0_3, pair_1_3, token0, token2):
        result = best_trade_exact_out(
            [pair_0_1, pair_0_3, pair_1_3], token0, TokenAmount(token2, 10)
        )
        assert result == []


class TestParallelSearch:
    def test_matches_sequential_exact_in(
        self, pair_0_1, pair_0_2, pair_0_3, pair_1_2, pair_1_3, token0, token2
    ):
        pairs = [pair_0_1, pair_0_2, pair_0_3, pair_1_2, pair_1_3]
        sequential = best_trade_exact_in(pairs, TokenAmount(token0, 100), token2)
        with ThreadPoolExecutor(max_workers=4) as executor:
            parallel = best_trade_exact_in(
                pairs, TokenAmount(token0, 100), token2, executor=executor
            )
        assert [t.route.pairs for t in parallel] == [t.route.pairs for t in sequential]
        assert [t.output_amount.raw for t in parallel] == [
            t.output_amount.raw for t in sequential
        ]

    def test_matches_sequential_exact_out(
        self, pair_0_1, pair_0_2, pair_0_3, pair_1_2, pair_1_3, token0, token2
    ):
        pairs = [pair_0_1, pair_0_2, pair_0_3, pair_1_2, pair_1_3]
        sequential = best_trade_exact_out(pairs, token0, TokenAmount(token2, 100))
        with ThreadPoolExecutor(max_workers=4) as executor:
            parallel = best_trade_exact_out(
                pairs, token0, TokenAmount(token2, 100), executor=executor
            )
        assert [t.route.pairs for t in parallel] == [t.route.pairs for t in sequential]
        assert [t.input_amount.raw for t in parallel] == [t.input_amount.raw for t in sequential]


def _route_keys(trades):
    return {tuple(pair.liquidity_token.address for pair in t.route.pairs) for t in trades}


class TestHopLimitMonotonic:
    """Raising max_hops keeps every route found under a lower limit."""

    def test_exact_in(self, pair_0_1, pair_0_2, pair_0_3, pair_1_2, pair_1_3, token0, token2):
        pairs = [pair_0_1, pair_0_2, pair_0_3, pair_1_2, pair_1_3]
        found = [
            _route_keys(
                best_trade_exact_in(
                    pairs, TokenAmount(token0, 100), token2, max_num_results=20, max_hops=hops
                )
            )
            for hops in (1, 2, 3)
        ]
        assert found[0] <= found[1] <= found[2]
        assert len(found[0]) == 1
        assert len(found[1]) == 2
        assert len(found[2]) == 3

    def test_exact_out(self, pair_0_1, pair_0_2, pair_0_3, pair_1_2, pair_1_3, token0, token2):
        pairs = [pair_0_1, pair_0_2, pair_0_3, pair_1_2, pair_1_3]
        found = [
            _route_keys(
                best_trade_exact_out(
                    pairs, token0, TokenAmount(token2, 100), max_num_results=20, max_hops=hops
                )
            )
            for hops in (1, 2, 3)
        ]
        assert found[0] <= found[1] <= found[2]
        assert len(found[0]) == 1
