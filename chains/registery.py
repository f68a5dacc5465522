from chains.dto import ChainConfig
from clients.errors import UnsupportedChainError


class ChainRegistry:
    def __init__(self, chains: list[ChainConfig]):
        self._chains: dict[int, ChainConfig] = {}
        for cfg in chains:
            self._chains[cfg.chain_id] = cfg

    def get(self, chain_id: int) -> ChainConfig | None:
        return self._chains.get(chain_id)

    def resolve(self, chain_id: int) -> ChainConfig:
        """Return the config for ``chain_id``.

        Raises ``UnsupportedChainError`` for ids missing from the registry, so
        callers fail before any explorer request is made.
        """
        chain = self.get(chain_id)
        if chain is None:
            raise UnsupportedChainError(chain_id)
        return chain

    def list(self) -> list[ChainConfig]:
        return list(self._chains.values())
