from __future__ import annotations

import json
import logging
import re

import httpx

from alephium_indexer.domain.entities.asset import ALPH_NATIVE_ASSET, Asset
from alephium_indexer.domain.entities.contract_call import (
    DECIMALS_METHOD,
    NAME_METHOD,
    SYMBOL_METHOD,
    TOKEN_PAIR_METHOD,
    CallContractRequest,
    CallErr,
    CallOk,
    Calls,
    TypedValue,
)
from alephium_indexer.domain.entities.event import ContractEvent
from alephium_indexer.domain.entities.pool import PoolTokenPair, SubContract
from alephium_indexer.domain.exceptions import (
    AddressFormatError,
    AlephiumIndexerError,
    ContractCallError,
    DecodeError,
    IndexerInputError,
)
from alephium_indexer.domain.services.codec import address_from_token_id, decode_hex, group_of_address
from alephium_indexer.domain.services.events import filter_events
from alephium_indexer.infrastructure.clients.http_gateway import ModelT, RateLimitedGateway
from alephium_indexer.schemas.backend import SubContractsResponse, TransactionDetailsResponse
from alephium_indexer.schemas.node import (
    BlockEventsResponse,
    BlockHashesResponse,
    CallContractResult,
    ChainInfoResponse,
    ContractStateResponse,
    MulticallContractResponse,
)


logger = logging.getLogger(__name__)


BACKEND_URL = "https://backend.mainnet.alephium.org"
NODE_URL = "https://node.mainnet.alephium.org"
AYIN_PAIR_FACTORY_ADDRESS = "vyrkJHG49TXss6pGAz2dVxq5o7mBXNNXAV18nAeqVT1R"

DEFAULT_SWAP_CONTRACTS_LIMIT = 100
# Pool discovery reads exactly these pages of the factory's sub-contracts.
DISCOVERY_PAGES = (1, 2)

METADATA_METHODS = (SYMBOL_METHOD, NAME_METHOD, DECIMALS_METHOD)

_UNSIGNED_DECIMAL = re.compile(r"[0-9]+")
_UINT32_MAX = 0xFFFFFFFF


class AlephiumClient:
    """Read-only access to the Alephium node and explorer backend APIs.

    Every public method issues its requests through a RateLimitedGateway, so
    each call is followed by the configured sleep. Nothing is retried here.
    """

    def __init__(
        self,
        gateway: RateLimitedGateway,
        *,
        node_url: str = NODE_URL,
        backend_url: str = BACKEND_URL,
        pair_factory_address: str = AYIN_PAIR_FACTORY_ADDRESS,
        native_asset: Asset = ALPH_NATIVE_ASSET,
        log: logging.Logger | None = None,
    ):
        self._gateway = gateway
        self._node_url = node_url.rstrip("/")
        self._backend_url = backend_url.rstrip("/")
        self._pair_factory_address = pair_factory_address
        self._native_asset = native_asset
        self._log = log or logger

    def __enter__(self) -> "AlephiumClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        _ = (exc_type, exc, tb)
        self.close()

    def close(self) -> None:
        self._gateway.close()

    # Pool discovery

    def discover_pools(self, page_size: int = DEFAULT_SWAP_CONTRACTS_LIMIT) -> list[SubContract]:
        if page_size < 1:
            raise IndexerInputError("page_size must be >= 1.")

        url = f"{self._backend_url}/contracts/{self._pair_factory_address}/sub-contracts"
        pools: list[SubContract] = []
        for page in DISCOVERY_PAGES:
            request = self._gateway.build_request("GET", url, params={"limit": page_size, "page": page})
            try:
                response = self._gateway.call(request, SubContractsResponse)
            except AlephiumIndexerError as exc:
                self._log.error(
                    "alephium_client: failed_to_call_api function=discover_pools page=%s limit=%s error=%s",
                    page,
                    page_size,
                    exc,
                )
                raise
            pools.extend(SubContract(address=address) for address in response.sub_contracts)

        self._log.info(
            "alephium_client: discovered_pools count=%s pages=%s limit=%s factory=%s",
            len(pools),
            len(DISCOVERY_PAGES),
            page_size,
            self._pair_factory_address,
        )
        return pools

    # Token metadata

    def resolve_pool_tokens(self, pool_address: str) -> PoolTokenPair:
        call = CallContractRequest(
            group=self._group_of("resolve_pool_tokens", pool_address),
            address=pool_address,
            method_index=TOKEN_PAIR_METHOD,
        )
        payload = call.to_payload()
        request = self._gateway.build_request(
            "POST",
            f"{self._node_url}/contracts/call-contract",
            json=payload,
        )
        try:
            response = self._gateway.call(request, CallContractResult)
        except AlephiumIndexerError as exc:
            self._log.error(
                "alephium_client: failed_to_call_api function=resolve_pool_tokens address=%s error=%s",
                pool_address,
                exc,
            )
            raise

        outcome = response.to_outcome()
        if isinstance(outcome, CallErr):
            self._log.error(
                "alephium_client: failed_to_get_token_pair function=resolve_pool_tokens address=%s payload=%s error=%s",
                pool_address,
                json.dumps(payload),
                outcome.message,
            )
            raise ContractCallError(outcome.message, pool_address)

        if len(outcome.values) != 2:
            self._log.error(
                "alephium_client: unexpected_token_pair function=resolve_pool_tokens address=%s returns=%s",
                pool_address,
                outcome.values,
            )
            raise DecodeError(f"expected 2 token ids for pool {pool_address}, got {len(outcome.values)}")

        addresses = []
        for position, value in enumerate(outcome.values):
            try:
                addresses.append(address_from_token_id(_string_value(value)))
            except DecodeError as exc:
                self._log.error(
                    "alephium_client: failed_to_calculate_address function=resolve_pool_tokens address=%s position=%s value=%s error=%s",
                    pool_address,
                    position,
                    value.value,
                    exc,
                )
                raise

        return PoolTokenPair(
            pool_address=pool_address,
            token0_address=addresses[0],
            token1_address=addresses[1],
        )

    def resolve_token_metadata(self, token_address: str, blockchain: str) -> Asset:
        if token_address == self._native_asset.address:
            return self._native_asset

        group = self._group_of("resolve_token_metadata", token_address)
        calls = Calls(
            calls=tuple(
                CallContractRequest(group=group, address=token_address, method_index=method)
                for method in METADATA_METHODS
            )
        )
        payload = calls.to_payload()
        request = self._gateway.build_request(
            "POST",
            f"{self._node_url}/contracts/multicall-contract",
            json=payload,
        )
        try:
            response = self._gateway.call(request, MulticallContractResponse)
        except AlephiumIndexerError as exc:
            self._log.error(
                "alephium_client: failed_to_call_api function=resolve_token_metadata address=%s error=%s",
                token_address,
                exc,
            )
            raise

        if len(response.results) != len(METADATA_METHODS):
            self._log.error(
                "alephium_client: unexpected_multicall_results function=resolve_token_metadata address=%s results=%s",
                token_address,
                len(response.results),
            )
            raise DecodeError(
                f"expected {len(METADATA_METHODS)} multicall results for {token_address}, "
                f"got {len(response.results)}"
            )

        fields: list[TypedValue] = []
        for method, result in zip(METADATA_METHODS, response.results):
            outcome = result.to_outcome()
            if isinstance(outcome, CallErr):
                self._log.error(
                    "alephium_client: failed_to_get_token_info function=resolve_token_metadata address=%s method=%s payload=%s error=%s",
                    token_address,
                    method,
                    json.dumps(payload),
                    outcome.message,
                )
                raise ContractCallError(outcome.message, token_address)
            try:
                fields.append(_first_return(outcome, token_address, method))
            except DecodeError as exc:
                self._log.error(
                    "alephium_client: empty_call_result function=resolve_token_metadata address=%s method=%s payload=%s error=%s",
                    token_address,
                    method,
                    json.dumps(payload),
                    exc,
                )
                raise

        return self._decode_asset(token_address, blockchain, fields)

    def _decode_asset(self, token_address: str, blockchain: str, fields: list[TypedValue]) -> Asset:
        try:
            symbol = decode_hex(_string_value(fields[SYMBOL_METHOD]))
            name = decode_hex(_string_value(fields[NAME_METHOD]))
            decimals = parse_decimals(_string_value(fields[DECIMALS_METHOD]))
        except DecodeError as exc:
            self._log.error(
                "alephium_client: failed_to_decode_token_info function=resolve_token_metadata address=%s row=%s error=%s",
                token_address,
                fields,
                exc,
            )
            raise

        return Asset(
            address=token_address,
            symbol=symbol,
            name=name,
            decimals=decimals,
            blockchain=blockchain,
        )

    # Chain and events

    def current_height(self, *, from_group: int = 0, to_group: int = 0) -> int:
        request = self._gateway.build_request(
            "GET",
            f"{self._node_url}/blockflow/chain-info",
            params={"fromGroup": from_group, "toGroup": to_group},
        )
        response = self._call_logged("current_height", request, ChainInfoResponse)
        return response.current_height

    def block_hashes_at_height(self, height: int, *, from_group: int = 0, to_group: int = 0) -> list[str]:
        request = self._gateway.build_request(
            "GET",
            f"{self._node_url}/blockflow/hashes",
            params={"fromGroup": from_group, "toGroup": to_group, "height": height},
        )
        response = self._call_logged("block_hashes_at_height", request, BlockHashesResponse)
        return list(response.headers)

    def events_in_block(self, block_hash: str, *, group: int = 0) -> list[ContractEvent]:
        request = self._gateway.build_request(
            "GET",
            f"{self._node_url}/events/block-hash/{block_hash}",
            params={"group": group},
        )
        response = self._call_logged("events_in_block", request, BlockEventsResponse)
        return [row.to_entity(block_hash=block_hash) for row in response.events]

    def filter_events(self, events: list[ContractEvent], event_index: int) -> list[ContractEvent]:
        return filter_events(events, event_index)

    def transaction_details(self, tx_hash: str) -> TransactionDetailsResponse:
        request = self._gateway.build_request("GET", f"{self._backend_url}/transactions/{tx_hash}")
        return self._call_logged("transaction_details", request, TransactionDetailsResponse)

    def contract_state(self, address: str) -> ContractStateResponse:
        request = self._gateway.build_request("GET", f"{self._node_url}/contracts/{address}/state")
        return self._call_logged("contract_state", request, ContractStateResponse)

    def _group_of(self, function: str, address: str) -> int:
        try:
            return group_of_address(address)
        except AddressFormatError as exc:
            self._log.error(
                "alephium_client: invalid_address function=%s address=%s error=%s",
                function,
                address,
                exc,
            )
            raise

    def _call_logged(
        self,
        function: str,
        request: httpx.Request,
        response_model: type[ModelT],
    ) -> ModelT:
        try:
            return self._gateway.call(request, response_model)
        except AlephiumIndexerError as exc:
            self._log.error(
                "alephium_client: failed_to_call_api function=%s url=%s error=%s",
                function,
                request.url,
                exc,
            )
            raise


def parse_decimals(value: str) -> int:
    """Unsigned base-10 decimals, truncated to 8 bits."""
    if not _UNSIGNED_DECIMAL.fullmatch(value):
        raise DecodeError(f"decimals is not an unsigned base-10 number: {value!r}")
    parsed = int(value)
    if parsed > _UINT32_MAX:
        raise DecodeError(f"decimals out of range: {value!r}")
    return parsed & 0xFF


def _string_value(field: TypedValue) -> str:
    if not isinstance(field.value, str):
        raise DecodeError(f"expected a string value, got {field.type}={field.value!r}")
    return field.value


def _first_return(outcome: CallOk, address: str, method: int) -> TypedValue:
    if not outcome.values:
        raise DecodeError(f"method {method} of {address} returned no values")
    return outcome.values[0]
