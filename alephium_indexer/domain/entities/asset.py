from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Asset:
    address: str
    symbol: str
    name: str
    decimals: int
    blockchain: str

    @property
    def key(self) -> tuple[str, str]:
        return (self.blockchain, self.address)


# ALPH has no backing token contract.
# https://github.com/alephium/token-list/blob/master/tokens/mainnet.json
ALPH_NATIVE_ASSET = Asset(
    address="tgx7VNFoP9DJiFMFgXXtafQZkUvyEdDHT9ryamHJYrjq",
    symbol="ALPH",
    name="Alephium",
    decimals=18,
    blockchain="alephium",
)
