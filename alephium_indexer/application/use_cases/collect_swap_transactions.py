from __future__ import annotations

import logging

from alephium_indexer.application.dto.collect_swap_transactions import (
    CollectSwapTransactionsInput,
    CollectSwapTransactionsOutput,
)
from alephium_indexer.application.ports.chain_events_port import ChainEventsPort
from alephium_indexer.domain.entities.event import SwapTransactionRef
from alephium_indexer.domain.exceptions import IndexerInputError
from alephium_indexer.domain.services.events import filter_events


logger = logging.getLogger(__name__)


class CollectSwapTransactionsUseCase:
    """Swap transactions of every block at one height, in block then event order."""

    def __init__(self, *, chain_events: ChainEventsPort):
        self._chain_events = chain_events

    def execute(self, command: CollectSwapTransactionsInput) -> CollectSwapTransactionsOutput:
        if command.height < 0:
            raise IndexerInputError("height must be >= 0.")

        block_hashes = self._chain_events.block_hashes_at_height(command.height)
        swaps: list[SwapTransactionRef] = []
        for block_hash in block_hashes:
            events = self._chain_events.events_in_block(block_hash)
            for event in filter_events(events, command.event_index):
                swaps.append(
                    SwapTransactionRef(
                        block_hash=event.block_hash or block_hash,
                        tx_id=event.tx_id,
                        contract_address=event.contract_address,
                    )
                )

        logger.info(
            "collect_swap_transactions: height=%s blocks=%s swaps=%s event_index=%s",
            command.height,
            len(block_hashes),
            len(swaps),
            command.event_index,
        )
        return CollectSwapTransactionsOutput(
            height=command.height,
            block_hashes=block_hashes,
            swaps=swaps,
        )
