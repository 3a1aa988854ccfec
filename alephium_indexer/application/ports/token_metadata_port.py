from __future__ import annotations

from typing import Protocol

from alephium_indexer.domain.entities.asset import Asset


class TokenMetadataPort(Protocol):
    def resolve_token_metadata(self, token_address: str, blockchain: str) -> Asset:
        ...
