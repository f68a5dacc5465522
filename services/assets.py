import asyncio
import logging

from chains import registery
from chains.registery import ChainRegistry
from clients.dto import RawToken
from clients.explorer import ExplorerClient
from models.dtos import AssetData
from utils.numeric import is_number, to_decimal

module_logger = logging.getLogger(__name__)

NATIVE_DECIMALS = "18"

ETH = AssetData(
    symbol="ETH",
    name="Ethereum",
    decimals=NATIVE_DECIMALS,
    contract_address="",
)

# chain_id -> native currency reported by the explorer for that chain
NATIVE_CURRENCIES: dict[int, AssetData] = {
    100: AssetData(
        symbol="DAI",
        name="Dai Stablecoin v1.0",
        decimals=NATIVE_DECIMALS,
        contract_address="0x89d24a6b4ccb1b6faa2625fe562bdd9a23260359",
    ),
}


def get_native_currency(chain_id: int) -> AssetData:
    template = NATIVE_CURRENCIES.get(chain_id, ETH)
    return AssetData(
        symbol=template.symbol,
        name=template.name,
        decimals=template.decimals,
        contract_address=template.contract_address,
    )


def is_positive_balance(balance: str | None) -> bool:
    return bool(balance) and is_number(balance) and to_decimal(balance) != 0


class AssetAggregator:
    def __init__(self, explorer: ExplorerClient, chains: ChainRegistry = registery):
        self.explorer = explorer
        self.chains = chains

    async def get_assets(self, address: str, chain_id: int) -> list[AssetData]:
        chain = self.chains.resolve(chain_id)

        native_currency = get_native_currency(chain_id)
        native_currency.balance = await self.explorer.get_balance(chain, address)

        token_list = await self.explorer.get_token_list(chain, address)

        results = await asyncio.gather(
            *[
                self.explorer.get_token_balance(chain, address, token.contract_address)
                for token in token_list
            ],
            return_exceptions=True
        )

        tokens: list[AssetData] = []
        for token, balance in zip(token_list, results):
            if isinstance(balance, Exception):
                module_logger.warning(
                    f"Balance of {token.contract_address} for {address} unavailable: {balance}"
                )
                continue

            asset = self._build_token(token, balance)
            if asset is not None:
                tokens.append(asset)

        module_logger.info(
            f"Assets for {address} on {chain.display_name}: "
            f"{len(tokens)} of {len(token_list)} tokens kept"
        )

        return [native_currency, *tokens]

    @staticmethod
    def _build_token(token: RawToken, balance: str | None) -> AssetData | None:
        if not is_positive_balance(balance):
            return None

        if not token.decimals or not token.name:
            return None

        return AssetData(
            symbol=token.symbol or "",
            name=token.name,
            decimals=token.decimals,
            contract_address=token.contract_address,
            balance=balance,
        )
