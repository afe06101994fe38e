"""Finance client: API transport, cached domain state and derived metrics."""

__version__ = "0.1.0"
