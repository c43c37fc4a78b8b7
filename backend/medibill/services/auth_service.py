# Overview: Client for the remote authentication service; turns a credential check into a Principal.

"""
Authentication Service client

The remote API verifies credentials and answers with the user's identity,
role and branch. This module only maps that answer onto a Principal or a
typed AuthenticationError; it never stores passwords or tokens.

Response envelope:
    {"success": bool, "message": str?,
     "data": {"user": {"id", "name", "role", "branch": {"id", "name"}},
              "token": str}}

Timeouts and retries belong to the HTTP layer; callers only see
"authenticated" or AuthenticationError.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import httpx

from .session_service import Principal


logger = logging.getLogger(__name__)


class AuthFailureReason(str, Enum):
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NETWORK_FAILURE = "NETWORK_FAILURE"
    UNKNOWN_BRANCH = "UNKNOWN_BRANCH"
    INVALID_RESPONSE = "INVALID_RESPONSE"


class AuthenticationError(Exception):
    """Raised when the credential check does not produce a principal."""

    def __init__(self, message: str, reason: AuthFailureReason = AuthFailureReason.INVALID_CREDENTIALS):
        super().__init__(message)
        self.message = message
        self.reason = reason


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str
    branch_id: str | None = None

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, branch_id={self.branch_id!r})"


class Authenticator(Protocol):
    def authenticate(self, credentials: Credentials) -> Principal: ...


def principal_from_user_payload(user) -> Principal:
    """
    Map the API's user object onto a Principal.

    Raises AuthenticationError(INVALID_RESPONSE) when the payload is incomplete
    or names a role this client does not know.
    """
    if not isinstance(user, dict):
        raise AuthenticationError("Login response did not include a user", AuthFailureReason.INVALID_RESPONSE)

    branch = user.get("branch")
    if isinstance(branch, dict):
        branch_id = branch.get("id")
        branch_name = branch.get("name")
    else:
        branch_id = user.get("branchId")
        branch_name = branch

    try:
        return Principal.from_dict({
            "id": user.get("id"),
            "name": user.get("name") or user.get("username"),
            "role": user.get("role"),
            "branch": branch_name,
            "branchId": branch_id,
        })
    except ValueError as exc:
        raise AuthenticationError(
            f"Login response rejected: {exc}", AuthFailureReason.INVALID_RESPONSE
        ) from exc


def _mentions_branch(message: str | None) -> bool:
    return bool(message) and "branch" in message.lower()


class HttpAuthenticator:
    """Authenticator backed by the remote REST API."""

    def __init__(self, base_url: str, timeout: float = 10.0, client: httpx.Client | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> httpx.Client:
        # Created on first use; close() releases it
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    def close(self):
        if self._client is not None:
            self._client.close()
            self._client = None

    def authenticate(self, credentials: Credentials) -> Principal:
        payload = {
            "username": credentials.username,
            "password": credentials.password,
        }
        if credentials.branch_id:
            payload["branch"] = credentials.branch_id

        try:
            response = self.client.post(
                f"{self.base_url}/auth/login",
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            logger.warning("Authentication service unreachable: %s", exc)
            raise AuthenticationError(
                "Unable to reach the authentication service. Please try again.",
                AuthFailureReason.NETWORK_FAILURE,
            ) from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            if response.status_code >= 500:
                raise AuthenticationError(
                    "Authentication service error. Please try again.",
                    AuthFailureReason.NETWORK_FAILURE,
                )
            raise AuthenticationError("Malformed login response", AuthFailureReason.INVALID_RESPONSE)

        message = body.get("message") if isinstance(body.get("message"), str) else None

        if response.status_code >= 500:
            raise AuthenticationError(
                message or "Authentication service error. Please try again.",
                AuthFailureReason.NETWORK_FAILURE,
            )

        if response.status_code >= 400 or not body.get("success"):
            if response.status_code == 404 or _mentions_branch(message):
                logger.warning("Login rejected for %r: unknown branch", credentials.username)
                raise AuthenticationError(message or "Unknown branch", AuthFailureReason.UNKNOWN_BRANCH)
            logger.warning("Login rejected for %r", credentials.username)
            raise AuthenticationError(message or "Login failed", AuthFailureReason.INVALID_CREDENTIALS)

        data = body.get("data")
        if not isinstance(data, dict):
            raise AuthenticationError("Login response did not include data", AuthFailureReason.INVALID_RESPONSE)

        return principal_from_user_payload(data.get("user"))
