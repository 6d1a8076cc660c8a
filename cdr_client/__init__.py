"""
cdr_client: run AQL queries against Clinical Data Repositories.

Components:
- CDRClient: queries a single repository over its REST API
- MultiCDRClient: fans a query out to several repositories
- RepositoryError: raised when a repository answers with an error status
- ConnectionConfig / BasicAuthentication: connection settings
- setup_logging: optional log output for embedding applications
"""

from .schemas import BasicAuthentication, ConnectionConfig
from .errors import (
    CDRClientError,
    ErrorBody,
    JsonErrorBody,
    RepositoryError,
    TextErrorBody,
)
from .clients import CDRClient, MultiCDRClient, QueryAggregation, ResultFormatter
from .logging_config import setup_logging

__all__ = [
    "BasicAuthentication",
    "ConnectionConfig",
    "CDRClientError",
    "ErrorBody",
    "JsonErrorBody",
    "RepositoryError",
    "TextErrorBody",
    "CDRClient",
    "MultiCDRClient",
    "QueryAggregation",
    "ResultFormatter",
    "setup_logging",
]
