from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExplorerModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
        frozen=True,
    )


class ExplorerEnvelope(ExplorerModel):
    status: str | None = None
    message: str | None = None
    result: Any = None


class RawToken(ExplorerModel):
    contract_address: str = Field(alias="contractAddress")
    name: str | None = None
    symbol: str | None = None
    decimals: str | None = None
    type: str | None = None


class RawTx(ExplorerModel):
    hash: str
    time_stamp: str = Field(alias="timeStamp")
    from_address: str = Field(default="", alias="from")
    to_address: str = Field(default="", alias="to")
    nonce: str = ""
    gas_price: str = Field(default="0", alias="gasPrice")
    gas_used: str = Field(default="0", alias="gasUsed")
    value: str = "0"
    input: str = ""
    is_error: str | None = Field(default=None, alias="isError")


class RawTokenTransfer(ExplorerModel):
    hash: str
    time_stamp: str = Field(alias="timeStamp")
    from_address: str = Field(default="", alias="from")
    to_address: str = Field(default="", alias="to")
    nonce: str = ""
    gas_price: str = Field(default="0", alias="gasPrice")
    gas_used: str = Field(default="0", alias="gasUsed")
    value: str = "0"
    input: str = ""
    contract_address: str = Field(default="", alias="contractAddress")
    token_symbol: str = Field(default="", alias="tokenSymbol")
    token_name: str = Field(default="", alias="tokenName")
    token_decimal: str = Field(default="", alias="tokenDecimal")


@dataclass
class MethodSignature:
    name: str
    text_signature: str


class RawSignature(ExplorerModel):
    id: int
    text_signature: str
    hex_signature: str | None = None


class RawSignaturePage(ExplorerModel):
    count: int | None = None
    results: list[RawSignature] = Field(default_factory=list)
