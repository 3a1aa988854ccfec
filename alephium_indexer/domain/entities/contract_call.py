from __future__ import annotations

from dataclasses import dataclass
from typing import Union


SYMBOL_METHOD = 0
NAME_METHOD = 1
DECIMALS_METHOD = 2
TOKEN_PAIR_METHOD = 7

SWAP_EVENT_INDEX = 2


@dataclass(frozen=True)
class CallContractRequest:
    group: int
    address: str
    method_index: int

    def to_payload(self) -> dict:
        return {
            "group": self.group,
            "address": self.address,
            "methodIndex": self.method_index,
        }


@dataclass(frozen=True)
class Calls:
    calls: tuple[CallContractRequest, ...]

    def to_payload(self) -> dict:
        return {"calls": [call.to_payload() for call in self.calls]}


@dataclass(frozen=True)
class TypedValue:
    type: str
    value: str | bool | int


@dataclass(frozen=True)
class CallOk:
    values: tuple[TypedValue, ...]


@dataclass(frozen=True)
class CallErr:
    message: str


CallOutcome = Union[CallOk, CallErr]
