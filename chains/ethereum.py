from chains.dto import ChainConfig


ethereum = ChainConfig(
    chain_id=1,
    name="eth",
    network="mainnet",
    display_name="Ethereum",
    symbol="ETH",
)

ropsten = ChainConfig(
    chain_id=3,
    name="eth",
    network="ropsten",
    display_name="Ropsten",
    symbol="ETH",
)

rinkeby = ChainConfig(
    chain_id=4,
    name="eth",
    network="rinkeby",
    display_name="Rinkeby",
    symbol="ETH",
)

goerli = ChainConfig(
    chain_id=5,
    name="eth",
    network="goerli",
    display_name="Goerli",
    symbol="ETH",
)

kovan = ChainConfig(
    chain_id=42,
    name="eth",
    network="kovan",
    display_name="Kovan",
    symbol="ETH",
)

classic = ChainConfig(
    chain_id=61,
    name="etc",
    network="mainnet",
    display_name="Ethereum Classic",
    symbol="ETC",
)
