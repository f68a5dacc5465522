import asyncio
import logging

from chains import registery
from chains.registery import ChainRegistry
from clients.dto import RawTokenTransfer, RawTx
from clients.explorer import ExplorerClient
from clients.selectors import SelectorRegistry
from models.dtos import AssetData, ParsedTx, TxOperation
from services.assets import get_native_currency
from utils.numeric import multiply, to_decimal

module_logger = logging.getLogger(__name__)

# Explorer timestamps are unix seconds. Records from the tx list are scaled to
# milliseconds, records synthesized from token transfers only by 100.
# Both factors are kept as-is until the intended unit is confirmed.
PRIMARY_TIMESTAMP_SCALE = 1000
SYNTHESIZED_TIMESTAMP_SCALE = 100

SELECTOR_LENGTH = 10


def get_selector(input_data: str) -> str:
    return (input_data or "")[:SELECTOR_LENGTH]


class TransactionReconciler:
    def __init__(
        self,
        explorer: ExplorerClient,
        selectors: SelectorRegistry,
        chains: ChainRegistry = registery
    ):
        self.explorer = explorer
        self.selectors = selectors
        self.chains = chains

    async def get_transactions(self, address: str, chain_id: int) -> list[ParsedTx]:
        chain = self.chains.resolve(chain_id)

        tx_list = await self.explorer.get_tx_list(chain, address)
        transactions = [self._parse_tx(tx, chain_id) for tx in tx_list]

        token_txs = await self.explorer.get_token_tx(chain, address)
        selectors = list(dict.fromkeys(get_selector(tx.input) for tx in token_txs))
        names = await asyncio.gather(*[self._resolve_function_name(s) for s in selectors])
        function_names = dict(zip(selectors, names))

        synthesized = 0
        for token_tx in token_txs:
            function_name = function_names[get_selector(token_tx.input)]
            if not self._fold_transfer(transactions, token_tx, function_name, chain_id):
                synthesized += 1

        transactions.sort(key=lambda tx: to_decimal(tx.timestamp), reverse=True)

        module_logger.info(
            f"Transactions for {address} on {chain.display_name}: {len(tx_list)} listed, "
            f"{len(token_txs)} token transfers, {synthesized} synthesized"
        )

        return transactions

    async def _resolve_function_name(self, selector: str) -> str:
        try:
            method = await self.selectors.lookup(selector)
        except Exception as e:
            module_logger.warning(f"Selector lookup for {selector!r} failed: {e}")
            return selector

        if method and method.name:
            return method.name
        return selector

    @staticmethod
    def _parse_tx(tx: RawTx, chain_id: int) -> ParsedTx:
        return ParsedTx(
            timestamp=multiply(tx.time_stamp, PRIMARY_TIMESTAMP_SCALE),
            hash=tx.hash,
            from_address=tx.from_address,
            to_address=tx.to_address,
            nonce=tx.nonce,
            gas_price=tx.gas_price,
            gas_used=tx.gas_used,
            fee=multiply(tx.gas_price, tx.gas_used),
            value=tx.value,
            input=tx.input,
            error=tx.is_error == "1",
            asset=get_native_currency(chain_id),
            operations=[],
        )

    @staticmethod
    def _build_operation(token_tx: RawTokenTransfer, function_name: str) -> TxOperation:
        asset = AssetData(
            symbol=token_tx.token_symbol,
            name=token_tx.token_name,
            decimals=token_tx.token_decimal,
            contract_address=token_tx.contract_address,
        )
        return TxOperation(
            asset=asset,
            value=token_tx.value,
            from_address=token_tx.from_address,
            to_address=token_tx.to_address,
            function_name=function_name,
        )

    @staticmethod
    def _synthesize_tx(token_tx: RawTokenTransfer, chain_id: int) -> ParsedTx:
        return ParsedTx(
            timestamp=multiply(token_tx.time_stamp, SYNTHESIZED_TIMESTAMP_SCALE),
            hash=token_tx.hash,
            from_address=token_tx.from_address,
            to_address=token_tx.to_address,
            nonce=token_tx.nonce,
            gas_price=token_tx.gas_price,
            gas_used=token_tx.gas_used,
            fee=multiply(token_tx.gas_price, token_tx.gas_used),
            value=token_tx.value,
            input=token_tx.input,
            error=False,
            asset=get_native_currency(chain_id),
            operations=[],
        )

    def _fold_transfer(
        self,
        transactions: list[ParsedTx],
        token_tx: RawTokenTransfer,
        function_name: str,
        chain_id: int
    ) -> bool:
        """Attach ``token_tx`` to the first transaction sharing its hash.

        Returns False when no transaction matched and a new one was
        synthesized from the transfer instead.
        """
        tx_hash = token_tx.hash.lower()

        for tx in transactions:
            if tx.hash.lower() == tx_hash:
                tx.operations.append(self._build_operation(token_tx, function_name))
                return True

        transactions.append(self._synthesize_tx(token_tx, chain_id))
        return False
