from dataclasses import dataclass


@dataclass
class ChainConfig:
    chain_id: int
    name: str
    network: str
    display_name: str
    symbol: str
