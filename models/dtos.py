from dataclasses import dataclass, field
from typing import Any


@dataclass
class AssetData:
    symbol: str
    name: str
    decimals: str
    contract_address: str = ""
    balance: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "symbol": self.symbol,
            "name": self.name,
            "decimals": self.decimals,
            "contractAddress": self.contract_address,
        }
        if self.balance is not None:
            data["balance"] = self.balance
        return data


@dataclass
class TxOperation:
    asset: AssetData
    value: str
    from_address: str
    to_address: str
    function_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "asset": self.asset.to_dict(),
            "value": self.value,
            "from": self.from_address,
            "to": self.to_address,
            "functionName": self.function_name,
        }


@dataclass
class ParsedTx:
    timestamp: str
    hash: str
    from_address: str
    to_address: str
    nonce: str
    gas_price: str
    gas_used: str
    fee: str
    value: str
    input: str
    error: bool
    asset: AssetData
    operations: list[TxOperation] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "hash": self.hash,
            "from": self.from_address,
            "to": self.to_address,
            "nonce": self.nonce,
            "gasPrice": self.gas_price,
            "gasUsed": self.gas_used,
            "fee": self.fee,
            "value": self.value,
            "input": self.input,
            "error": self.error,
            "asset": self.asset.to_dict(),
            "operations": [op.to_dict() for op in self.operations],
        }
