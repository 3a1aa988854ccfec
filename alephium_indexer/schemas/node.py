from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from alephium_indexer.domain.entities.contract_call import CallErr, CallOk, CallOutcome, TypedValue
from alephium_indexer.domain.entities.event import ContractEvent


class NodeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ValSchema(NodeModel):
    type: str
    value: str | bool | int

    def to_entity(self) -> TypedValue:
        return TypedValue(type=self.type, value=self.value)


class CallContractResult(NodeModel):
    type: str = ""
    returns: list[ValSchema] = Field(default_factory=list)
    gas_used: int | None = Field(default=None, alias="gasUsed")
    error: str | None = None

    def to_outcome(self) -> CallOutcome:
        if self.error is not None or self.type == "CallContractFailed":
            return CallErr(message=self.error or "contract call failed")
        return CallOk(values=tuple(row.to_entity() for row in self.returns))


class MulticallContractResponse(NodeModel):
    results: list[CallContractResult]


class ChainInfoResponse(NodeModel):
    current_height: int = Field(..., alias="currentHeight")


class BlockHashesResponse(NodeModel):
    headers: list[str]


class ContractEventSchema(NodeModel):
    block_hash: str = Field(default="", alias="blockHash")
    tx_id: str = Field(..., alias="txId")
    contract_address: str = Field(..., alias="contractAddress")
    event_index: int = Field(..., alias="eventIndex")
    fields: list[ValSchema] = Field(default_factory=list)

    def to_entity(self, *, block_hash: str = "") -> ContractEvent:
        return ContractEvent(
            block_hash=self.block_hash or block_hash,
            tx_id=self.tx_id,
            contract_address=self.contract_address,
            event_index=self.event_index,
            fields=tuple(row.to_entity() for row in self.fields),
        )


class BlockEventsResponse(NodeModel):
    events: list[ContractEventSchema] = Field(default_factory=list)


class TokenBalance(NodeModel):
    id: str
    amount: str


class ContractAsset(NodeModel):
    atto_alph_amount: str = Field(..., alias="attoAlphAmount")
    tokens: list[TokenBalance] = Field(default_factory=list)


class ContractStateResponse(NodeModel):
    address: str
    bytecode: str = ""
    code_hash: str = Field(default="", alias="codeHash")
    initial_state_hash: str | None = Field(default=None, alias="initialStateHash")
    imm_fields: list[ValSchema] = Field(default_factory=list, alias="immFields")
    mut_fields: list[ValSchema] = Field(default_factory=list, alias="mutFields")
    asset: ContractAsset | None = None
