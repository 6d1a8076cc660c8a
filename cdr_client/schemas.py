"""
Pydantic schemas for CDR connection configuration.
Defines the connection and authentication structures a client is built from.
"""

import base64
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BasicAuthentication(BaseModel):
    """HTTP Basic credentials for a repository."""
    model_config = ConfigDict(frozen=True)

    type: Literal["basic"] = "basic"
    username: str
    password: str = Field(repr=False)


class ConnectionConfig(BaseModel):
    """
    Connection settings for one Clinical Data Repository.

    Attributes:
        url: Base URL of the repository (e.g., "https://cdr.example.org/ehrbase")
        authentication: Credentials sent with every query
    """
    model_config = ConfigDict(frozen=True)

    url: str
    authentication: BasicAuthentication

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("url must not be empty")
        return value

    def basic_credentials(self) -> str:
        """
        Build the Authorization header value.

        RETURNS:
            "Basic " followed by base64("username:password")
        """
        auth = self.authentication
        raw = f"{auth.username}:{auth.password}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")
