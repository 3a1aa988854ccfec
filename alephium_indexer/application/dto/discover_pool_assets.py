from __future__ import annotations

from dataclasses import dataclass

from alephium_indexer.domain.entities.pool import PoolAssets, PoolTokenPair


@dataclass(frozen=True)
class DiscoverPoolAssetsInput:
    blockchain: str = "alephium"
    page_size: int = 100


@dataclass(frozen=True)
class DiscoverPoolAssetsOutput:
    pairs: list[PoolTokenPair]
    pools: list[PoolAssets]
