"""
Error taxonomy shared by the store, the token service and the routes.

Routes translate NotFound into a 404 themselves. Unauthorized (and its
token subclasses) become 401 in the auth gate. StorageError and anything
unexpected fall through to the process-wide handlers in main.py, which
answer with a generic 500.
"""


class StaffingError(Exception):
    """Base class for every error raised by this service."""


class NotFound(StaffingError):
    """No record with the requested id (or lookup field) exists."""

    def __init__(self, collection: str, key: str):
        self.collection = collection
        self.key = key
        super().__init__(f"{collection}: no record matching '{key}'")


class StorageError(StaffingError):
    """The collection file could not be read, parsed or written."""


class Unauthorized(StaffingError):
    """Missing, malformed, invalid or expired bearer credential."""


class InvalidToken(Unauthorized):
    """Signature mismatch, malformed token or missing claims."""


class TokenExpired(Unauthorized):
    """The token's exp claim is in the past."""
