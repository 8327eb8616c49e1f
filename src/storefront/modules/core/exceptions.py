"""Error taxonomy shared by the cart and order modules.

Three families, each terminal for the single user action that raised it
(nothing here is retried automatically):

- ``GuardRejected``: a client-side guard refused the action before any
  network call.  No state changed.
- ``RemoteCallFailed``: the call was made and failed, or the server
  answered ``success: false``.  Local caches keep their pre-call state.
- ``SessionExpired``: the server no longer accepts the session.  The
  caller should send the user to re-authenticate instead of showing an
  inline error.
"""

from __future__ import annotations

from typing import Optional


class StorefrontError(Exception):
    """Base class for every error raised by the storefront core."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class GuardRejected(StorefrontError):
    """A guard rejected the action locally (no network attempted)."""


class SubmissionInProgress(GuardRejected):
    """The same action is already in flight for this entity."""


class RemoteCallFailed(StorefrontError):
    """Transport failure, non-2xx response, or ``success: false`` envelope.

    ``message`` is opaque display text taken from the server when it
    provided one.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RemoteNotFound(RemoteCallFailed):
    """The server reports that the addressed entity does not exist."""


class MalformedResponse(RemoteCallFailed):
    """The server answered with a payload the client cannot parse."""


class SessionExpired(StorefrontError):
    """The session lapsed (HTTP 401/403); re-authentication is required."""
