from __future__ import annotations

from typing import Protocol

from alephium_indexer.domain.entities.event import ContractEvent


class ChainEventsPort(Protocol):
    def block_hashes_at_height(self, height: int) -> list[str]:
        ...

    def events_in_block(self, block_hash: str) -> list[ContractEvent]:
        ...
