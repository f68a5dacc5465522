import asyncio

import pytest

from chains.dto import ChainConfig
from clients.dto import MethodSignature, RawToken, RawTokenTransfer, RawTx
from clients.errors import TransportError

ADDRESS = "0x52908400098527886e0f7030069857d2e4169ee7"


class FakeExplorer:
    """In-memory explorer. Token balances resolve in reverse list order."""

    def __init__(
        self,
        balance: str | None = "1000000000000000000",
        tokens: list[dict] | None = None,
        token_balances: dict[str, str | Exception | None] | None = None,
        txs: list[dict] | None = None,
        token_txs: list[dict] | None = None,
    ):
        self.balance = balance
        self.tokens = [RawToken.model_validate(t) for t in tokens or []]
        self.token_balances = token_balances or {}
        self.txs = [RawTx.model_validate(t) for t in txs or []]
        self.token_txs = [RawTokenTransfer.model_validate(t) for t in token_txs or []]
        self.calls: list[tuple] = []
        self.completed: list[str] = []
        self.fail_on: set[str] = set()

    def _check(self, action: str):
        if action in self.fail_on:
            raise TransportError(f"{action}: timed out")

    async def get_balance(self, chain: ChainConfig, address: str):
        self.calls.append(("balance", chain.chain_id, address))
        self._check("balance")
        return self.balance

    async def get_token_list(self, chain: ChainConfig, address: str):
        self.calls.append(("tokenlist", chain.chain_id, address))
        self._check("tokenlist")
        return list(self.tokens)

    async def get_token_balance(self, chain: ChainConfig, address: str, contract_address: str):
        self.calls.append(("tokenbalance", chain.chain_id, address, contract_address))
        index = [t.contract_address for t in self.tokens].index(contract_address)
        await asyncio.sleep(0.005 * (len(self.tokens) - index))
        self.completed.append(contract_address)

        result = self.token_balances.get(contract_address)
        if isinstance(result, Exception):
            raise result
        return result

    async def get_tx_list(self, chain: ChainConfig, address: str):
        self.calls.append(("txlist", chain.chain_id, address))
        self._check("txlist")
        return list(self.txs)

    async def get_token_tx(self, chain: ChainConfig, address: str):
        self.calls.append(("tokentx", chain.chain_id, address))
        self._check("tokentx")
        return list(self.token_txs)


class FakeSelectors:
    """Selector lookups that finish in reverse order of being issued."""

    def __init__(self, names: dict[str, str | Exception] | None = None):
        self.names = names or {}
        self.lookups: list[str] = []

    async def lookup(self, selector: str):
        self.lookups.append(selector)
        await asyncio.sleep(0.01 / len(self.lookups))

        name = self.names.get(selector)
        if isinstance(name, Exception):
            raise name
        if name is None:
            return None
        return MethodSignature(name=name, text_signature=f"{name}(address,uint256)")


def make_tx(hash: str, time_stamp: str, **fields) -> dict:
    tx = {
        "hash": hash,
        "timeStamp": time_stamp,
        "from": ADDRESS,
        "to": "0x0000000000000000000000000000000000000001",
        "nonce": "1",
        "gasPrice": "10",
        "gasUsed": "5",
        "value": "0",
        "input": "0x",
        "isError": "0",
    }
    tx.update(fields)
    return tx


def make_transfer(hash: str, time_stamp: str = "500", **fields) -> dict:
    transfer = {
        "hash": hash,
        "timeStamp": time_stamp,
        "from": ADDRESS,
        "to": "0x0000000000000000000000000000000000000002",
        "nonce": "2",
        "gasPrice": "10",
        "gasUsed": "5",
        "value": "100",
        "input": "0xa9059cbb000000000000000000000000",
        "contractAddress": "0x6b175474e89094c44da98b954eedeac495271d0f",
        "tokenSymbol": "DAI",
        "tokenName": "Dai Stablecoin",
        "tokenDecimal": "18",
    }
    transfer.update(fields)
    return transfer


@pytest.fixture
def address() -> str:
    return ADDRESS
