"""Known pair factory and router deployments.

Each liquidity provider deploys a factory (which creates pairs through
CREATE2 with a fixed init code hash) and a router. Chains where a provider
has no deployment are simply absent from the table.
"""

from __future__ import annotations

from dataclasses import dataclass

from eth_utils import to_checksum_address

from pairswap.constants import ChainId, LiquidityProvider


@dataclass(frozen=True)
class DeploymentKey:
    provider: LiquidityProvider
    chain_id: int


@dataclass(frozen=True)
class Deployment:
    """Addresses and pair bytecode hash of one provider on one chain.

    Attributes:
        factory_address: Checksummed factory contract address
        router_address: Checksummed router contract address
        init_code_hash: 0x-prefixed keccak256 of the pair creation code
    """

    factory_address: str
    router_address: str
    init_code_hash: str


@dataclass(frozen=True)
class FactoryCreation:
    """Block and unix timestamp at which a provider's factory was created."""

    block_number: int
    timestamp: int


def _deployment(factory: str, router: str, init_code_hash: str) -> Deployment:
    return Deployment(
        factory_address=to_checksum_address(factory),
        router_address=to_checksum_address(router),
        init_code_hash=init_code_hash.lower(),
    )


_UNISWAP = _deployment(
    "0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f",
    "0x7a250d5630b4cf539739df2c5dacb4c659f2488d",
    "0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f",
)

DEPLOYMENTS: dict[DeploymentKey, Deployment] = {
    # Uniswap V2 uses the same addresses on every supported chain
    **{DeploymentKey(LiquidityProvider.UNISWAP, chain): _UNISWAP for chain in ChainId},
    DeploymentKey(LiquidityProvider.PLASMA, ChainId.MAINNET): _deployment(
        "0xd87ad19db2c4ccbf897106de034d52e3dd90ea60",
        "0x5ec243f1f7ecfc137e98365c30c9a28691d86132",
        "0x611ee9501fb19c9df82695e66f6c58d69d86907b531dfbed652231515ae84081",
    ),
    DeploymentKey(LiquidityProvider.PLASMA, ChainId.KOVAN): _deployment(
        "0x7a6521ba7ba45c908be726d719acd547d4a8e246",
        "0x905df0e2cd022bc1a67bf15df485b18ea631d304",
        "0xe60eb03e61b5fbeba179f6defb71bb00c5db9dab3b10d39c3985d66081de6d3d",
    ),
    DeploymentKey(LiquidityProvider.SUSHISWAP, ChainId.MAINNET): _deployment(
        "0xc0aee478e3658e2610c5f7a4a2e1777ce9e4f2ac",
        "0xd9e1ce17f2641f24ae83637ab66a2cca9c378b9f",
        "0xe18a34eb0e04b04f7a0ac29a6e80748dca96319b42c54d679cb821dca90c6303",
    ),
    DeploymentKey(LiquidityProvider.SUSHISWAP, ChainId.KOVAN): _deployment(
        "0x8d4fd620cb7ed677870b8b62f22c166cc76fb519",
        "0x4a0b3a56ecb360924639f57cd41d0358aed9acdd",
        "0xa0f8210a4091231cb34588d36a21ac73a6681adda0d825bf06c963da5ff4af47",
    ),
}

FACTORY_CREATED_AT: dict[LiquidityProvider, FactoryCreation] = {
    LiquidityProvider.UNISWAP: FactoryCreation(block_number=10000834, timestamp=1588609990),
    LiquidityProvider.PLASMA: FactoryCreation(block_number=11718233, timestamp=1611490340),
    LiquidityProvider.SUSHISWAP: FactoryCreation(block_number=10794228, timestamp=1599214223),
}

LIQUIDITY_TOKEN_NAME: dict[LiquidityProvider, str] = {
    LiquidityProvider.UNISWAP: "Uniswap V2",
    LiquidityProvider.PLASMA: "Plasmaswap",
    LiquidityProvider.SUSHISWAP: "Sushiswap",
}

LIQUIDITY_TOKEN_SYMBOL: dict[LiquidityProvider, str] = {
    LiquidityProvider.UNISWAP: "UNI-V2",
    LiquidityProvider.PLASMA: "P-LP",
    LiquidityProvider.SUSHISWAP: "SLP",
}


def get_deployment(
    chain_id: int | None, provider: LiquidityProvider | None
) -> Deployment | None:
    """Look up a deployment; None if either key is missing or unknown."""
    if chain_id is None or provider is None:
        return None
    return DEPLOYMENTS.get(DeploymentKey(provider, chain_id))


def get_factory_address(
    chain_id: int | None, provider: LiquidityProvider | None
) -> str | None:
    deployment = get_deployment(chain_id, provider)
    return deployment.factory_address if deployment is not None else None


def get_router_address(
    chain_id: int | None, provider: LiquidityProvider | None
) -> str | None:
    deployment = get_deployment(chain_id, provider)
    return deployment.router_address if deployment is not None else None


def get_init_code_hash(
    chain_id: int | None, provider: LiquidityProvider | None
) -> str | None:
    deployment = get_deployment(chain_id, provider)
    return deployment.init_code_hash if deployment is not None else None


def get_factory_created_at(provider: LiquidityProvider) -> FactoryCreation:
    """Factory creation block and timestamp for a provider.

    Raises:
        KeyError: If the provider is unknown
    """
    return FACTORY_CREATED_AT[provider]


__all__ = [
    "DEPLOYMENTS",
    "FACTORY_CREATED_AT",
    "LIQUIDITY_TOKEN_NAME",
    "LIQUIDITY_TOKEN_SYMBOL",
    "Deployment",
    "DeploymentKey",
    "FactoryCreation",
    "get_deployment",
    "get_factory_address",
    "get_factory_created_at",
    "get_init_code_hash",
    "get_router_address",
]
