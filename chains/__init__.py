from chains.registery import ChainRegistry
from chains.ethereum import ethereum, ropsten, rinkeby, goerli, kovan, classic
from chains.poa import core, sokol, xdai


registery = ChainRegistry([ethereum, ropsten, rinkeby, goerli, kovan, classic, core, sokol, xdai])
