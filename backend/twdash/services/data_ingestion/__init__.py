"""
Data Ingestion Boundary

Normalizes collaborator-supplied quote rows into OHLC bars.
"""

from twdash.services.data_ingestion.normalization import bars_from_quotes, to_epoch_seconds

__all__ = [
    "bars_from_quotes",
    "to_epoch_seconds",
]
