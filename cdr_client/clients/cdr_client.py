"""
=============================================================================
CDR CLIENT
=============================================================================

PURPOSE:
    Run AQL queries against one Clinical Data Repository over its REST API.

HOW IT WORKS:
    1. Credentials are encoded once, when the client is built
    2. query() POSTs {"aql": ...} to {url}/rest/v1/query
    3. The response status decides the outcome:
         204        -> {}
         other 2xx  -> decoded JSON body
         non-2xx    -> RepositoryError

NOTES:
    - One network round trip per call. No retries.
    - No timeout of our own: httpx defaults apply.
    - Transport failures (httpx.ConnectError, httpx.TimeoutException, ...)
      are not wrapped.

USAGE:
    from cdr_client import CDRClient

    client = CDRClient({
        "url": "https://cdr.example.org/ehrbase",
        "authentication": {"type": "basic", "username": "u", "password": "p"},
    })
    rows = await client.query("SELECT e/ehr_id/value FROM EHR e")

=============================================================================
"""

import logging
from typing import Any, Mapping, Optional, Union

import httpx

from ..errors import RepositoryError
from ..schemas import ConnectionConfig

# ============================================================
# SETUP
# ============================================================

logger = logging.getLogger("cdr-client.client")

QUERY_PATH = "/rest/v1/query"


# ============================================================
# MAIN CLIENT CLASS
# ============================================================

class CDRClient:
    """
    Async HTTP client for a single Clinical Data Repository.

    The client holds no mutable state after construction, so one instance
    can serve any number of concurrent queries.
    """

    def __init__(
        self,
        config: Union[ConnectionConfig, Mapping[str, Any]],
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the client.

        ARGS:
            config: ConnectionConfig, or a mapping with the same shape
                    ({"url": ..., "authentication": {"type": "basic", ...}})
            transport: Optional httpx transport (e.g. httpx.MockTransport)

        RAISES:
            pydantic.ValidationError: config is malformed or uses an
                                      unsupported authentication type
        """
        if not isinstance(config, ConnectionConfig):
            config = ConnectionConfig.model_validate(config)

        self._url = config.url
        self._encoded_credentials = config.basic_credentials()
        self._transport = transport

        logger.debug(f"CDRClient initialized: {self._url}")

    @property
    def url(self) -> str:
        return self._url

    @property
    def encoded_credentials(self) -> str:
        """Authorization header value, computed once at construction."""
        return self._encoded_credentials

    @property
    def endpoint(self) -> str:
        return f"{self._url}{QUERY_PATH}"

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": self._encoded_credentials
        }

    async def query(self, aql: str) -> Any:
        """
        Run one AQL query.

        ARGS:
            aql: The query text. Sent as-is; the server validates it.

        RETURNS:
            The decoded JSON response, or {} for 204 No Content

        RAISES:
            RepositoryError: the repository answered with a non-2xx status
            httpx.HTTPError: the request itself failed
            json.JSONDecodeError: a response body could not be decoded
        """
        logger.debug(f"POST {self.endpoint}")

        async with httpx.AsyncClient(
            transport=self._transport,
            follow_redirects=True
        ) as client:
            response = await client.post(
                self.endpoint,
                json={"aql": aql},
                headers=self._headers()
            )

        return self._check_status(response)

    def _check_status(self, response: httpx.Response) -> Any:
        # -----------------------------
        # No content
        # -----------------------------
        if response.status_code == 204:
            logger.debug(f"{self._url}: 204 No Content")
            return {}

        # -----------------------------
        # Error status
        # -----------------------------
        if not response.is_success:
            error = RepositoryError.from_response(response)
            logger.warning(f"Query failed on {self._url}: {error.message}")
            raise error

        logger.debug(f"{self._url}: {response.status_code}")
        return response.json()

    def __repr__(self) -> str:
        return f"CDRClient(url={self._url!r})"
