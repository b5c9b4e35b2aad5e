# src/odoo_timer/odoo/errors.py

"""
Client error taxonomy.

Every failure of the remote-session client is an OdooClientError, so callers
(and the callback runner) only need to catch one type. Messages are meant to be
shown to the user; the technical cause is chained via __cause__ and logged.
"""

from __future__ import annotations


class OdooClientError(Exception):
    """Base class for all client failures."""


class MalformedEndpoint(OdooClientError):
    """The configured base URL cannot be turned into a JSON-RPC endpoint."""


class TransportError(OdooClientError):
    """Network or IO failure while talking to the server."""


class ProtocolError(OdooClientError):
    """The response is not valid JSON or lacks the expected fields."""


class RemoteError(ProtocolError):
    """The server answered with a JSON-RPC `error` member."""

    def __init__(self, message: str, *, code: int | None = None, data: object = None) -> None:
        super().__init__(message)
        self.code = code
        self.data = data


class NotAuthenticated(OdooClientError):
    """An authenticated call was attempted before a successful login."""


class LoginFailed(OdooClientError):
    """
    Login did not produce a user id.

    Wrong credentials and an unreachable server look the same from here;
    the underlying error (if any) is available as __cause__.
    """
