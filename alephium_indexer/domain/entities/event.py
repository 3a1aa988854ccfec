from __future__ import annotations

from dataclasses import dataclass

from alephium_indexer.domain.entities.contract_call import TypedValue


@dataclass(frozen=True)
class ContractEvent:
    block_hash: str
    tx_id: str
    contract_address: str
    event_index: int
    fields: tuple[TypedValue, ...] = ()


@dataclass(frozen=True)
class SwapTransactionRef:
    block_hash: str
    tx_id: str
    contract_address: str
