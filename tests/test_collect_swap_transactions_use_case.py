from __future__ import annotations

import pytest

from alephium_indexer.application.dto.collect_swap_transactions import CollectSwapTransactionsInput
from alephium_indexer.application.use_cases.collect_swap_transactions import (
    CollectSwapTransactionsUseCase,
)
from alephium_indexer.domain.entities.event import ContractEvent, SwapTransactionRef
from alephium_indexer.domain.exceptions import APIError, IndexerInputError


def _event(block_hash: str, tx_id: str, event_index: int, contract: str = "pool") -> ContractEvent:
    return ContractEvent(
        block_hash=block_hash,
        tx_id=tx_id,
        contract_address=contract,
        event_index=event_index,
    )


class FakeChainEvents:
    def __init__(self, blocks: dict[str, list[ContractEvent]], *, failing_block: str | None = None):
        self._blocks = blocks
        self._failing_block = failing_block
        self.heights: list[int] = []

    def block_hashes_at_height(self, height: int) -> list[str]:
        self.heights.append(height)
        return list(self._blocks)

    def events_in_block(self, block_hash: str) -> list[ContractEvent]:
        if block_hash == self._failing_block:
            raise APIError(500, "boom")
        return self._blocks[block_hash]


def test_collects_swap_events_in_block_then_event_order():
    chain_events = FakeChainEvents(
        {
            "h1": [_event("h1", "tx1", 2), _event("h1", "tx2", 0), _event("h1", "tx3", 2, "pool-b")],
            "h2": [_event("h2", "tx4", 1)],
            "h3": [_event("h3", "tx5", 2)],
        }
    )
    use_case = CollectSwapTransactionsUseCase(chain_events=chain_events)

    output = use_case.execute(CollectSwapTransactionsInput(height=12))

    assert chain_events.heights == [12]
    assert output.block_hashes == ["h1", "h2", "h3"]
    assert output.swaps == [
        SwapTransactionRef(block_hash="h1", tx_id="tx1", contract_address="pool"),
        SwapTransactionRef(block_hash="h1", tx_id="tx3", contract_address="pool-b"),
        SwapTransactionRef(block_hash="h3", tx_id="tx5", contract_address="pool"),
    ]


def test_empty_height_returns_no_swaps():
    output = CollectSwapTransactionsUseCase(chain_events=FakeChainEvents({})).execute(
        CollectSwapTransactionsInput(height=0)
    )
    assert output.swaps == []


def test_propagates_block_failures():
    use_case = CollectSwapTransactionsUseCase(
        chain_events=FakeChainEvents({"h1": [], "h2": []}, failing_block="h2"),
    )
    with pytest.raises(APIError):
        use_case.execute(CollectSwapTransactionsInput(height=5))


def test_rejects_negative_height():
    use_case = CollectSwapTransactionsUseCase(chain_events=FakeChainEvents({}))
    with pytest.raises(IndexerInputError):
        use_case.execute(CollectSwapTransactionsInput(height=-1))
