"""
CDR Client Modules

Provides async HTTP clients for querying one or many Clinical Data Repositories.
"""

from .cdr_client import CDRClient
from .multi_cdr_client import MultiCDRClient, QueryAggregation, ResultFormatter

__all__ = [
    "CDRClient",
    "MultiCDRClient",
    "QueryAggregation",
    "ResultFormatter"
]
