from __future__ import annotations

from dataclasses import dataclass

from alephium_indexer.domain.entities.contract_call import SWAP_EVENT_INDEX
from alephium_indexer.domain.entities.event import SwapTransactionRef


@dataclass(frozen=True)
class CollectSwapTransactionsInput:
    height: int
    event_index: int = SWAP_EVENT_INDEX


@dataclass(frozen=True)
class CollectSwapTransactionsOutput:
    height: int
    block_hashes: list[str]
    swaps: list[SwapTransactionRef]
