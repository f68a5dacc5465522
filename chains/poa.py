from chains.dto import ChainConfig


core = ChainConfig(
    chain_id=99,
    name="poa",
    network="core",
    display_name="POA Network Core",
    symbol="POA",
)

sokol = ChainConfig(
    chain_id=77,
    name="poa",
    network="sokol",
    display_name="POA Network Sokol",
    symbol="POA",
)

xdai = ChainConfig(
    chain_id=100,
    name="poa",
    network="xdai",
    display_name="xDai Chain",
    symbol="xDAI",
)
