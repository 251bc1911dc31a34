"""CryptoPro wallet backend: ledger, resilient pricing and holdings aggregation."""

__version__ = "0.1.0"
