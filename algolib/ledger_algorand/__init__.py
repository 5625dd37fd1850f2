"""Ledger Nano Algorand app client"""

from .client import Client, TransportClient
from .signing_data import StdSigData, StdSignMetadata, StdSigDataResponse

__all__ = ["Client", "TransportClient", "StdSigData", "StdSignMetadata", "StdSigDataResponse"]
