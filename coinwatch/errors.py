class CoinwatchError(Exception):
    """Base error; the message is surfaced to clients as `details`."""

class UpstreamError(CoinwatchError):
    """CoinGecko was unreachable, timed out or answered with garbage."""

class PersistenceError(CoinwatchError):
    """A read or write against the history collection failed."""
