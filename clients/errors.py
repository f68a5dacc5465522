class AggregatorError(Exception):
    """Base exception for account aggregation errors."""


class UnsupportedChainError(AggregatorError):
    def __init__(self, chain_id: int):
        super().__init__(f"Chain {chain_id} is not supported")
        self.chain_id = chain_id


class InvalidAddressError(AggregatorError):
    def __init__(self, address: str):
        super().__init__(f"Invalid address: {address!r}")
        self.address = address


class ExplorerError(AggregatorError):
    """Explorer API reported a failure for the request."""


class TransportError(ExplorerError):
    """Network, timeout or HTTP status failure talking to an upstream API."""


class MalformedResponseError(ExplorerError):
    """Upstream payload is missing expected fields or has the wrong shape."""
