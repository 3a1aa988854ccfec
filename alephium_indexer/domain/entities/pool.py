from __future__ import annotations

from dataclasses import dataclass

from alephium_indexer.domain.entities.asset import Asset


@dataclass(frozen=True)
class SubContract:
    address: str


@dataclass(frozen=True)
class PoolTokenPair:
    pool_address: str
    token0_address: str
    token1_address: str


@dataclass(frozen=True)
class PoolAssets:
    pool_address: str
    token0: Asset
    token1: Asset
