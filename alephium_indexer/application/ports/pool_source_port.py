from __future__ import annotations

from typing import Protocol

from alephium_indexer.domain.entities.pool import PoolTokenPair, SubContract


class PoolSourcePort(Protocol):
    def discover_pools(self, page_size: int) -> list[SubContract]:
        ...

    def resolve_pool_tokens(self, pool_address: str) -> PoolTokenPair:
        ...
