from __future__ import annotations

import logging

from alephium_indexer.application.dto.discover_pool_assets import (
    DiscoverPoolAssetsInput,
    DiscoverPoolAssetsOutput,
)
from alephium_indexer.application.ports.pool_source_port import PoolSourcePort
from alephium_indexer.application.ports.token_metadata_port import TokenMetadataPort
from alephium_indexer.domain.entities.asset import Asset
from alephium_indexer.domain.entities.pool import PoolAssets, PoolTokenPair
from alephium_indexer.domain.exceptions import IndexerInputError


logger = logging.getLogger(__name__)


class DiscoverPoolAssetsUseCase:
    def __init__(self, *, pool_source: PoolSourcePort, token_metadata: TokenMetadataPort):
        self._pool_source = pool_source
        self._token_metadata = token_metadata

    def execute(self, command: DiscoverPoolAssetsInput) -> DiscoverPoolAssetsOutput:
        if command.page_size < 1:
            raise IndexerInputError("page_size must be >= 1.")
        if not command.blockchain.strip():
            raise IndexerInputError("blockchain is required.")

        sub_contracts = self._pool_source.discover_pools(command.page_size)

        assets: dict[tuple[str, str], Asset] = {}
        pairs: list[PoolTokenPair] = []
        pools: list[PoolAssets] = []
        for sub_contract in sub_contracts:
            pair = self._pool_source.resolve_pool_tokens(sub_contract.address)
            pairs.append(pair)
            pools.append(
                PoolAssets(
                    pool_address=pair.pool_address,
                    token0=self._asset(assets, pair.token0_address, command.blockchain),
                    token1=self._asset(assets, pair.token1_address, command.blockchain),
                )
            )

        logger.info(
            "discover_pool_assets: resolved pools=%s unique_assets=%s blockchain=%s",
            len(pools),
            len(assets),
            command.blockchain,
        )
        return DiscoverPoolAssetsOutput(pairs=pairs, pools=pools)

    def _asset(self, cache: dict[tuple[str, str], Asset], token_address: str, blockchain: str) -> Asset:
        key = (blockchain, token_address)
        cached = cache.get(key)
        if cached is not None:
            return cached
        asset = self._token_metadata.resolve_token_metadata(token_address, blockchain)
        cache[key] = asset
        return asset
