from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _bool(name: str, default: str = "false") -> bool:
    value = (_env(name, default) or "").strip().lower()
    return value in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    node_url: str
    backend_url: str
    pair_factory_address: str
    blockchain_name: str
    sleep_between_calls_ms: int
    swap_contracts_limit: int
    request_timeout_seconds: float
    debug: bool


def get_settings() -> Settings:
    return Settings(
        node_url=_env("ALEPHIUM_NODE_URL", "https://node.mainnet.alephium.org"),
        backend_url=_env("ALEPHIUM_BACKEND_URL", "https://backend.mainnet.alephium.org"),
        pair_factory_address=_env(
            "ALEPHIUM_PAIR_FACTORY_ADDRESS",
            "vyrkJHG49TXss6pGAz2dVxq5o7mBXNNXAV18nAeqVT1R",
        ),
        blockchain_name=_env("ALEPHIUM_BLOCKCHAIN_NAME", "alephium"),
        sleep_between_calls_ms=int(_env("ALEPHIUM_SLEEP_BETWEEN_CALLS_MS", "300")),
        swap_contracts_limit=int(_env("ALEPHIUM_SWAP_CONTRACTS_LIMIT", "100")),
        request_timeout_seconds=float(_env("ALEPHIUM_REQUEST_TIMEOUT_SECONDS", "10")),
        debug=_bool("ALEPHIUM_DEBUG"),
    )
