"""
Domain values exchanged with the capability backends and over the API.

Pydantic models with camelCase aliases so that the JSON encoding matches the
explorer wire format. Identifiers are validated strings (see encoding.py);
currency amounts are arbitrary-precision integers encoded as decimal strings.
"""

from __future__ import annotations

import hashlib
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
)
from pydantic.alias_generators import to_camel

from explorerd.types.encoding import (
    TRANSACTION_ID_PREFIX,
    format_chain_index,
    parse_address,
    parse_block_id,
    parse_element_id,
    parse_transaction_id,
    split_chain_index,
)

Address = Annotated[str, AfterValidator(parse_address)]
ElementID = Annotated[str, AfterValidator(parse_element_id)]
TransactionID = Annotated[str, AfterValidator(parse_transaction_id)]
BlockID = Annotated[str, AfterValidator(parse_block_id)]


def _parse_currency(value: Any) -> int:
    """Accept an int or a decimal string; reject negatives, bools and floats."""
    if isinstance(value, bool):
        raise ValueError("currency must be an integer amount")
    if isinstance(value, int):
        amount = value
    elif isinstance(value, str) and value.strip().isdigit():
        amount = int(value.strip())
    else:
        raise ValueError(f"invalid currency amount {value!r}")
    if amount < 0:
        raise ValueError("currency amount must be non-negative")
    return amount


# Hastings; JSON encodes as decimal string to survive 128-bit values
Currency = Annotated[
    int,
    BeforeValidator(_parse_currency),
    PlainSerializer(lambda v: str(v), return_type=str),
]


class ExplorerModel(BaseModel):
    """Base for wire models: camelCase aliases, immutable after construction."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ChainIndex(ExplorerModel):
    """A position in the chain: height plus the ID of the block at that height."""

    height: int = Field(..., ge=0, description="Block height")
    id: BlockID = Field(..., description="ID of the block at height")

    @classmethod
    def parse(cls, value: str) -> "ChainIndex":
        """Parse "<height>::<block id>". Raises ValueError when malformed."""
        height, block_id = split_chain_index(value)
        return cls(height=height, id=block_id)

    def __str__(self) -> str:
        return format_chain_index(self.height, self.id)


class StateElement(ExplorerModel):
    id: ElementID = Field(..., description="Element ID (elem:<hex>:<index>)")
    leaf_index: int = Field(0, description="Leaf position in the state accumulator")
    merkle_proof: list[str] = Field(default_factory=list, description="Proof hashes, leaf to root")


class SiacoinOutput(ExplorerModel):
    value: Currency = Field(..., description="Amount in hastings (decimal string)")
    address: Address = Field(..., description="Owner address")


class SiafundOutput(ExplorerModel):
    value: int = Field(..., ge=0, description="Number of siafunds")
    address: Address = Field(..., description="Owner address")


class SiacoinElement(StateElement):
    siacoin_output: SiacoinOutput = Field(..., description="The output this element holds")
    maturity_height: int = Field(0, description="Height at which the output becomes spendable")


class SiafundElement(StateElement):
    siafund_output: SiafundOutput = Field(..., description="The output this element holds")
    claim_start: Currency = Field(0, description="Siafund pool value when the output was created")


class FileContract(ExplorerModel):
    filesize: int = Field(0, description="Size of the contracted data in bytes")
    file_merkle_root: str = Field("", description="Merkle root of the contracted data")
    window_start: int = Field(0, description="First height of the proof window")
    window_end: int = Field(0, description="Height after which the proof window closes")
    renter_output: SiacoinOutput = Field(..., description="Payout to the renter")
    host_output: SiacoinOutput = Field(..., description="Payout to the host on success")
    missed_host_value: Currency = Field(0, description="Host payout if no proof is submitted")
    total_collateral: Currency = Field(0, description="Collateral the host put up")
    renter_public_key: str = Field("", description="Renter's public key")
    host_public_key: str = Field("", description="Host's public key")
    revision_number: int = Field(0, description="Latest revision number")


class FileContractElement(StateElement):
    file_contract: FileContract = Field(..., description="The contract this element holds")


class SiacoinInput(ExplorerModel):
    parent_id: ElementID = Field(..., alias="parentID", description="Siacoin element being spent")


class SiafundInput(ExplorerModel):
    parent_id: ElementID = Field(..., alias="parentID", description="Siafund element being spent")
    claim_address: Address = Field(..., description="Address receiving the siafund pool claim")


class Transaction(ExplorerModel):
    """
    An unconfirmed or confirmed transaction.

    The ID is derived from the content: BLAKE2b-256 over the camelCase JSON
    encoding, so two equal transactions always share an ID.
    """

    siacoin_inputs: list[SiacoinInput] = Field(default_factory=list, description="Siacoin elements spent")
    siacoin_outputs: list[SiacoinOutput] = Field(default_factory=list, description="Siacoin outputs created")
    siafund_inputs: list[SiafundInput] = Field(default_factory=list, description="Siafund elements spent")
    siafund_outputs: list[SiafundOutput] = Field(default_factory=list, description="Siafund outputs created")
    file_contracts: list[FileContract] = Field(default_factory=list, description="Contracts formed")
    arbitrary_data: list[str] = Field(default_factory=list, description="Opaque data entries")
    miner_fee: Currency = Field(0, description="Fee paid to the miner, in hastings")

    @property
    def id(self) -> str:
        payload = self.model_dump_json(by_alias=True).encode("utf-8")
        digest = hashlib.blake2b(payload, digest_size=32).hexdigest()
        return f"{TRANSACTION_ID_PREFIX}:{digest}"


class ChainStats(ExplorerModel):
    """Aggregate statistics of the chain at a given block."""

    block: ChainIndex = Field(..., description="Block the statistics were taken at")
    spent_siacoins_count: int = Field(0, description="Siacoin elements spent so far")
    spent_siafunds_count: int = Field(0, description="Siafund elements spent so far")
    active_contract_count: int = Field(0, description="Contracts not yet resolved")
    active_contract_cost: Currency = Field(0, description="Total cost of active contracts")
    active_contract_size: int = Field(0, description="Bytes stored under active contracts")
    total_contract_cost: Currency = Field(0, description="Total cost of all contracts")
    total_contract_size: int = Field(0, description="Bytes stored under all contracts")
    total_revision_volume: int = Field(0, description="Total number of contract revisions")


class ConsensusState(ExplorerModel):
    """Validation state of the chain at an index (passed through untouched)."""

    index: ChainIndex = Field(..., description="Chain position of this state")
    total_work: Currency = Field(0, description="Cumulative work up to index")
    difficulty: Currency = Field(0, description="Current mining difficulty")
    oak_work: Currency = Field(0, description="Decayed work used for difficulty adjustment")
    oak_time: int = Field(0, description="Decayed block time used for difficulty adjustment")
    genesis_timestamp: int = Field(0, description="Unix timestamp of the genesis block")
    siafund_pool: Currency = Field(0, description="Siafund pool value in hastings")


class BalanceView(ExplorerModel):
    """Siacoin and siafund balance of one address, computed per query."""

    siacoins: Currency = Field(..., description="Unspent siacoins in hastings (decimal string)")
    siafunds: int = Field(..., ge=0, description="Unspent siafunds")
