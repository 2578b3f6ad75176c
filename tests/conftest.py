"""Pytest configuration and fixtures."""

import pytest

from pairswap.entities import Pair, Token
from tests.helpers import make_pair, make_token


@pytest.fixture
def token0() -> Token:
    return make_token(0)


@pytest.fixture
def token1() -> Token:
    return make_token(1)


@pytest.fixture
def token2() -> Token:
    return make_token(2)


@pytest.fixture
def token3() -> Token:
    return make_token(3)


@pytest.fixture
def pair_0_1(token0: Token, token1: Token) -> Pair:
    return make_pair(token0, 1000, token1, 1000)


@pytest.fixture
def pair_0_2(token0: Token, token2: Token) -> Pair:
    return make_pair(token0, 1000, token2, 1100)


@pytest.fixture
def pair_0_3(token0: Token, token3: Token) -> Pair:
    return make_pair(token0, 1000, token3, 900)


@pytest.fixture
def pair_1_2(token1: Token, token2: Token) -> Pair:
    return make_pair(token1, 1200, token2, 1000)


@pytest.fixture
def pair_1_3(token1: Token, token3: Token) -> Pair:
    return make_pair(token1, 1200, token3, 1300)
