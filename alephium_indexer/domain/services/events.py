from __future__ import annotations

from collections.abc import Iterable

from alephium_indexer.domain.entities.event import ContractEvent


def filter_events(events: Iterable[ContractEvent], event_index: int) -> list[ContractEvent]:
    return [event for event in events if event.event_index == event_index]
