from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BackendModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SubContractsResponse(BackendModel):
    sub_contracts: list[str] = Field(default_factory=list, alias="subContracts")


class TokenAmount(BackendModel):
    id: str
    amount: str


class OutputRef(BackendModel):
    hint: int
    key: str


class TransactionInput(BackendModel):
    output_ref: OutputRef | None = Field(default=None, alias="outputRef")
    address: str | None = None
    atto_alph_amount: str | None = Field(default=None, alias="attoAlphAmount")
    tokens: list[TokenAmount] = Field(default_factory=list)


class TransactionOutput(BackendModel):
    type: str = ""
    key: str = ""
    address: str | None = None
    atto_alph_amount: str | None = Field(default=None, alias="attoAlphAmount")
    tokens: list[TokenAmount] = Field(default_factory=list)


class TransactionDetailsResponse(BackendModel):
    type: str = ""
    hash: str
    block_hash: str = Field(..., alias="blockHash")
    timestamp: int
    inputs: list[TransactionInput] = Field(default_factory=list)
    outputs: list[TransactionOutput] = Field(default_factory=list)
    gas_amount: int | None = Field(default=None, alias="gasAmount")
    gas_price: str | None = Field(default=None, alias="gasPrice")
    script_execution_ok: bool | None = Field(default=None, alias="scriptExecutionOk")
    coinbase: bool = False
