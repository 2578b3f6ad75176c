"""Constant-product pair snapshot.

A Pair holds the two reserves of one pool at a point in time. Quotes never
mutate it: get_output_amount / get_input_amount return the quoted amount
together with the Pair the pool would become after the swap.

Quote formulas (integer, matching the pair contract):
    amount_out = in * 997 * reserve_out / (reserve_in * 1000 + in * 997)
    amount_in  = reserve_in * out * 1000 / ((reserve_out - out) * 997) + 1
"""

from __future__ import annotations

from functools import lru_cache

from eth_abi.packed import encode_packed
from eth_utils import keccak, to_checksum_address

from pairswap.constants import (
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    LIQUIDITY_TOKEN_DECIMALS,
    MINIMUM_LIQUIDITY,
    PROTOCOL_FEE_DIVISOR,
    LiquidityProvider,
)
from pairswap.deployments import (
    LIQUIDITY_TOKEN_NAME,
    LIQUIDITY_TOKEN_SYMBOL,
    get_factory_address,
    get_init_code_hash,
)
from pairswap.entities.fractions.price import Price
from pairswap.entities.fractions.token_amount import TokenAmount
from pairswap.entities.token import Token
from pairswap.errors import (
    CurrencyMismatchError,
    DeploymentUnavailableError,
    InsufficientInputAmountError,
    InsufficientOutputAmountError,
    InsufficientReservesError,
    TokenNotInPairError,
)
from pairswap.math.sqrt import sqrt

_CREATE2_PREFIX = b"\xff"


@lru_cache(maxsize=4096)
def _compute_pair_address(
    chain_id: int, token0: str, token1: str, provider: LiquidityProvider
) -> str:
    factory = get_factory_address(chain_id, provider)
    init_code_hash = get_init_code_hash(chain_id, provider)
    if factory is None or init_code_hash is None:
        raise DeploymentUnavailableError(
            f"No {provider.name} deployment on chain {chain_id}"
        )
    salt = keccak(
        encode_packed(
            ["address", "address"],
            [bytes.fromhex(token0[2:]), bytes.fromhex(token1[2:])],
        )
    )
    digest = keccak(
        _CREATE2_PREFIX
        + bytes.fromhex(factory[2:])
        + salt
        + bytes.fromhex(init_code_hash[2:])
    )
    return to_checksum_address("0x" + digest[12:].hex())


class Pair:
    """Reserves of a two-token pool, ordered token0 < token1 by address.

    Attributes:
        provider: Liquidity provider that deployed the pool
        liquidity_token: The pool's ERC20 LP token (18 decimals)
        reserve0: Reserve of token0
        reserve1: Reserve of token1
    """

    __slots__ = ("_provider", "_reserves", "_liquidity_token")

    def __init__(
        self,
        amount_a: TokenAmount,
        amount_b: TokenAmount,
        provider: LiquidityProvider = LiquidityProvider.UNISWAP,
    ) -> None:
        """Create a pair from two reserves given in any order.

        Raises:
            ChainMismatchError: If the tokens are on different chains
            ValueError: If both amounts are of the same token
            DeploymentUnavailableError: If the provider has no deployment on the chain
        """
        if amount_a.token.sorts_before(amount_b.token):
            reserves = (amount_a, amount_b)
        else:
            reserves = (amount_b, amount_a)
        self._provider = provider
        self._reserves = reserves
        token0, token1 = reserves[0].token, reserves[1].token
        self._liquidity_token = Token(
            token0.chain_id,
            Pair.get_address(token0, token1, provider),
            LIQUIDITY_TOKEN_DECIMALS,
            LIQUIDITY_TOKEN_SYMBOL[provider],
            LIQUIDITY_TOKEN_NAME[provider],
        )

    @staticmethod
    def get_address(
        token_a: Token,
        token_b: Token,
        provider: LiquidityProvider = LiquidityProvider.UNISWAP,
    ) -> str:
        """Derive the CREATE2 address of the pool for two tokens.

        The result does not depend on argument order and is memoised.

        Raises:
            ChainMismatchError: If the tokens are on different chains
            DeploymentUnavailableError: If the provider has no deployment on the chain
        """
        token0, token1 = (token_a, token_b) if token_a.sorts_before(token_b) else (token_b, token_a)
        return _compute_pair_address(token0.chain_id, token0.address, token1.address, provider)

    # --- Accessors ---

    @property
    def provider(self) -> LiquidityProvider:
        return self._provider

    @property
    def liquidity_token(self) -> Token:
        return self._liquidity_token

    @property
    def chain_id(self) -> int:
        return self.token0.chain_id

    @property
    def token0(self) -> Token:
        return self._reserves[0].token

    @property
    def token1(self) -> Token:
        return self._reserves[1].token

    @property
    def reserve0(self) -> TokenAmount:
        return self._reserves[0]

    @property
    def reserve1(self) -> TokenAmount:
        return self._reserves[1]

    @property
    def token0_price(self) -> Price:
        """Price of token0 in token1 (reserve1 / reserve0)."""
        return Price(self.token0, self.token1, self.reserve0.raw, self.reserve1.raw)

    @property
    def token1_price(self) -> Price:
        """Price of token1 in token0 (reserve0 / reserve1)."""
        return Price(self.token1, self.token0, self.reserve1.raw, self.reserve0.raw)

    def involves_token(self, token: Token) -> bool:
        return token == self.token0 or token == self.token1

    def price_of(self, token: Token) -> Price:
        self._require_token(token)
        return self.token0_price if token == self.token0 else self.token1_price

    def reserve_of(self, token: Token) -> TokenAmount:
        self._require_token(token)
        return self.reserve0 if token == self.token0 else self.reserve1

    def other_token(self, token: Token) -> Token:
        self._require_token(token)
        return self.token1 if token == self.token0 else self.token0

    def _require_token(self, token: Token) -> None:
        if not self.involves_token(token):
            raise TokenNotInPairError(f"{token!r} is not in pair {self!r}")

    # --- Quotes ---

    def get_output_amount(self, input_amount: TokenAmount) -> tuple[TokenAmount, Pair]:
        """Quote the output of selling input_amount into the pool.

        Returns:
            (output_amount, pair after the swap)

        Raises:
            TokenNotInPairError: If the input token is not in the pair
            InsufficientReservesError: If either reserve is zero
            InsufficientInputAmountError: If the input or the resulting output is zero
        """
        input_token = input_amount.token
        self._require_token(input_token)
        if self.reserve0.raw == 0 or self.reserve1.raw == 0:
            raise InsufficientReservesError(f"Pair {self!r} has an empty reserve")
        if input_amount.raw == 0:
            raise InsufficientInputAmountError("Input amount is zero")

        input_reserve = self.reserve_of(input_token)
        output_reserve = self.reserve_of(self.other_token(input_token))

        amount_in_with_fee = input_amount.raw * FEE_NUMERATOR
        numerator = amount_in_with_fee * output_reserve.raw
        denominator = input_reserve.raw * FEE_DENOMINATOR + amount_in_with_fee
        output_raw = numerator // denominator
        if output_raw == 0:
            raise InsufficientInputAmountError(
                f"Input {input_amount.raw} is too small to produce any output"
            )

        output_amount = TokenAmount(output_reserve.token, output_raw)
        next_pair = Pair(
            input_reserve.add(input_amount),
            output_reserve.subtract(output_amount),
            self._provider,
        )
        return output_amount, next_pair

    def get_input_amount(self, output_amount: TokenAmount) -> tuple[TokenAmount, Pair]:
        """Quote the input needed to buy output_amount from the pool.

        Returns:
            (input_amount, pair after the swap)

        Raises:
            TokenNotInPairError: If the output token is not in the pair
            InsufficientReservesError: If a reserve is zero or output >= output reserve
            InsufficientOutputAmountError: If the requested output is zero
        """
        output_token = output_amount.token
        self._require_token(output_token)
        if self.reserve0.raw == 0 or self.reserve1.raw == 0:
            raise InsufficientReservesError(f"Pair {self!r} has an empty reserve")
        if output_amount.raw == 0:
            raise InsufficientOutputAmountError("Output amount is zero")

        output_reserve = self.reserve_of(output_token)
        input_reserve = self.reserve_of(self.other_token(output_token))
        if output_amount.raw >= output_reserve.raw:
            raise InsufficientReservesError(
                f"Output {output_amount.raw} not below reserve {output_reserve.raw}"
            )

        numerator = input_reserve.raw * output_amount.raw * FEE_DENOMINATOR
        denominator = (output_reserve.raw - output_amount.raw) * FEE_NUMERATOR
        input_amount = TokenAmount(input_reserve.token, numerator // denominator + 1)
        next_pair = Pair(
            input_reserve.add(input_amount),
            output_reserve.subtract(output_amount),
            self._provider,
        )
        return input_amount, next_pair

    # --- Liquidity ---

    def _check_liquidity_token(self, amount: TokenAmount) -> None:
        if amount.token != self._liquidity_token:
            raise CurrencyMismatchError(
                f"{amount.token!r} is not the liquidity token of {self!r}"
            )

    def get_liquidity_minted(
        self,
        total_supply: TokenAmount,
        amount_a: TokenAmount,
        amount_b: TokenAmount,
    ) -> TokenAmount:
        """Liquidity tokens minted for depositing amount_a and amount_b.

        An empty pool mints sqrt(a * b) - MINIMUM_LIQUIDITY; otherwise the
        smaller of the two pro-rata shares of total_supply.

        Raises:
            CurrencyMismatchError: If total_supply is not the liquidity token,
                or the deposit tokens are not this pair's tokens
            InsufficientInputAmountError: If no liquidity would be minted
        """
        self._check_liquidity_token(total_supply)
        if amount_a.token.sorts_before(amount_b.token):
            deposit0, deposit1 = amount_a, amount_b
        else:
            deposit0, deposit1 = amount_b, amount_a
        if deposit0.token != self.token0 or deposit1.token != self.token1:
            raise CurrencyMismatchError(
                f"Deposit tokens {deposit0.token!r}, {deposit1.token!r} do not match {self!r}"
            )

        if total_supply.raw == 0:
            liquidity = sqrt(deposit0.raw * deposit1.raw) - MINIMUM_LIQUIDITY
        else:
            liquidity = min(
                deposit0.raw * total_supply.raw // self.reserve0.raw,
                deposit1.raw * total_supply.raw // self.reserve1.raw,
            )
        if liquidity <= 0:
            raise InsufficientInputAmountError(
                f"Deposit of {deposit0.raw}/{deposit1.raw} mints no liquidity"
            )
        return TokenAmount(self._liquidity_token, liquidity)

    def get_liquidity_value(
        self,
        token: Token,
        total_supply: TokenAmount,
        liquidity: TokenAmount,
        fee_on: bool = False,
        k_last: int | None = None,
    ) -> TokenAmount:
        """Amount of token redeemable for burning liquidity.

        With fee_on, total_supply is first inflated by the protocol fee
        the pair would mint on the next liquidity event:
            fee = S * (sqrt(k) - sqrt(k_last)) / (5 * sqrt(k) + sqrt(k_last))

        Raises:
            TokenNotInPairError: If token is not in the pair
            CurrencyMismatchError: If total_supply or liquidity is not the liquidity token
            ValueError: If liquidity exceeds total_supply, or fee_on without k_last
        """
        self._require_token(token)
        self._check_liquidity_token(total_supply)
        self._check_liquidity_token(liquidity)
        if liquidity.raw > total_supply.raw:
            raise ValueError(
                f"Liquidity {liquidity.raw} exceeds total supply {total_supply.raw}"
            )

        total_supply_adjusted = total_supply.raw
        if fee_on:
            if k_last is None:
                raise ValueError("k_last is required when fee_on is set")
            if k_last != 0:
                root_k = sqrt(self.reserve0.raw * self.reserve1.raw)
                root_k_last = sqrt(k_last)
                if root_k > root_k_last:
                    numerator = total_supply.raw * (root_k - root_k_last)
                    denominator = root_k * PROTOCOL_FEE_DIVISOR + root_k_last
                    total_supply_adjusted += numerator // denominator

        return TokenAmount(
            token,
            liquidity.raw * self.reserve_of(token).raw // total_supply_adjusted,
        )

    def __repr__(self) -> str:
        return (
            f"Pair({self._provider.name}, {self.reserve0!r}, {self.reserve1!r})"
        )


__all__ = ["Pair"]
