from __future__ import annotations

import logging

from alephium_indexer.application.dto.discover_pool_assets import DiscoverPoolAssetsInput
from alephium_indexer.core.config import Settings
from alephium_indexer.infrastructure.clients.alephium_client import AlephiumClient
from alephium_indexer.infrastructure.clients.http_gateway import RateLimitedGateway, build_http_client


def build_alephium_client(settings: Settings, *, log: logging.Logger | None = None) -> AlephiumClient:
    http_client = build_http_client(
        timeout_seconds=settings.request_timeout_seconds,
        debug=settings.debug,
        log=log,
    )
    gateway = RateLimitedGateway(
        http_client,
        sleep_between_calls_seconds=settings.sleep_between_calls_ms / 1000.0,
        log=log,
    )
    return AlephiumClient(
        gateway,
        node_url=settings.node_url,
        backend_url=settings.backend_url,
        pair_factory_address=settings.pair_factory_address,
        log=log,
    )


def build_discover_pool_assets_input(settings: Settings) -> DiscoverPoolAssetsInput:
    return DiscoverPoolAssetsInput(
        blockchain=settings.blockchain_name,
        page_size=settings.swap_contracts_limit,
    )
