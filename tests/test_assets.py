import pytest

from clients.errors import TransportError, UnsupportedChainError
from conftest import FakeExplorer
from services.assets import AssetAggregator, get_native_currency, is_positive_balance

DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"
USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
LINK = "0x514910771af9ca656af840dff83e8264ecf986ca"


def token(contract: str, name: str | None = "Token", decimals: str | None = "18", symbol: str = "TKN"):
    return {
        "contractAddress": contract,
        "name": name,
        "symbol": symbol,
        "decimals": decimals,
        "type": "ERC-20",
    }


async def test_native_currency_always_first_even_when_zero(address):
    explorer = FakeExplorer(balance="0")

    assets = await AssetAggregator(explorer).get_assets(address, 1)

    assert len(assets) == 1
    assert assets[0].symbol == "ETH"
    assert assets[0].name == "Ethereum"
    assert assets[0].decimals == "18"
    assert assets[0].contract_address == ""
    assert assets[0].balance == "0"


@pytest.mark.parametrize("balance", ["garbage", None, ""])
async def test_native_balance_assigned_unconditionally(address, balance):
    explorer = FakeExplorer(balance=balance)

    assets = await AssetAggregator(explorer).get_assets(address, 1)

    assert [a.symbol for a in assets] == ["ETH"]
    assert assets[0].balance == balance


async def test_xdai_uses_dai_as_native_currency(address):
    explorer = FakeExplorer(balance="5")

    assets = await AssetAggregator(explorer).get_assets(address, 100)

    assert assets[0].symbol == "DAI"
    assert assets[0].name == "Dai Stablecoin v1.0"
    assert assets[0].decimals == "18"
    assert assets[0].contract_address == "0x89d24a6b4ccb1b6faa2625fe562bdd9a23260359"
    assert explorer.calls[0][:2] == ("balance", 100)


async def test_tokens_filtered_and_kept_in_list_order(address):
    explorer = FakeExplorer(
        tokens=[
            token(DAI, name="Dai", symbol="DAI"),
            token(USDC, name="USD Coin", symbol="USDC", decimals="6"),
            token(WETH, name="Wrapped Ether", symbol="WETH"),
            token(LINK, name="ChainLink", symbol="LINK"),
        ],
        token_balances={
            DAI: "250",
            USDC: "0",
            WETH: "not-a-number",
            LINK: "7",
        },
    )

    assets = await AssetAggregator(explorer).get_assets(address, 1)

    assert [a.symbol for a in assets] == ["ETH", "DAI", "LINK"]
    assert assets[1].balance == "250"
    assert assets[1].contract_address == DAI
    assert assets[2].balance == "7"
    # balances completed last-to-first, output still follows the token list
    assert explorer.completed == [LINK, WETH, USDC, DAI]


async def test_tokens_without_name_or_decimals_are_dropped(address):
    explorer = FakeExplorer(
        tokens=[
            token(DAI, name=None),
            token(USDC, decimals=None),
            token(WETH, name=""),
            token(LINK),
        ],
        token_balances={DAI: "1", USDC: "1", WETH: "1", LINK: "1"},
    )

    assets = await AssetAggregator(explorer).get_assets(address, 1)

    assert [a.contract_address for a in assets] == ["", LINK]


async def test_failed_token_balance_only_drops_that_token(address):
    explorer = FakeExplorer(
        tokens=[token(DAI, symbol="DAI"), token(USDC, symbol="USDC"), token(LINK, symbol="LINK")],
        token_balances={
            DAI: TransportError("tokenbalance: timed out"),
            USDC: None,
            LINK: "3",
        },
    )

    assets = await AssetAggregator(explorer).get_assets(address, 1)

    assert [a.symbol for a in assets] == ["ETH", "LINK"]


async def test_one_balance_query_per_token(address):
    explorer = FakeExplorer(
        tokens=[token(DAI), token(USDC)],
        token_balances={DAI: "1", USDC: "2"},
    )

    await AssetAggregator(explorer).get_assets(address, 1)

    queried = [c[3] for c in explorer.calls if c[0] == "tokenbalance"]
    assert sorted(queried) == sorted([DAI, USDC])


@pytest.mark.parametrize("action", ["balance", "tokenlist"])
async def test_single_shot_failures_propagate(address, action):
    explorer = FakeExplorer(tokens=[token(DAI)], token_balances={DAI: "1"})
    explorer.fail_on.add(action)

    with pytest.raises(TransportError):
        await AssetAggregator(explorer).get_assets(address, 1)


async def test_unknown_chain_is_rejected_before_any_call(address):
    explorer = FakeExplorer()

    with pytest.raises(UnsupportedChainError):
        await AssetAggregator(explorer).get_assets(address, 424242)

    assert explorer.calls == []


def test_native_currency_is_a_fresh_record():
    first = get_native_currency(1)
    first.balance = "1"

    assert get_native_currency(1).balance is None


async def test_exponent_form_balance_is_dropped(address):
    explorer = FakeExplorer(
        tokens=[token(DAI, symbol="DAI"), token(LINK, symbol="LINK")],
        token_balances={DAI: "1e30000000", LINK: "9"},
    )

    assets = await AssetAggregator(explorer).get_assets(address, 1)

    assert [a.symbol for a in assets] == ["ETH", "LINK"]


@pytest.mark.parametrize(
    "balance, expected",
    [("1", True), ("0.000", False), ("1e30000000", False), ("", False), (None, False)],
)
def test_is_positive_balance(balance, expected):
    assert is_positive_balance(balance) is expected
