"""
Import errors — client faults vs. internal faults.

Client faults (``client_fault = True``) carry a descriptive reason that may be
shown to the caller. Internal faults expose only a generic message; the
underlying cause stays in the exception chain and the logs.
"""

_INTERNAL_MESSAGE = "Internal error while importing vault data"


class VaultImportError(Exception):
    """Base class for every failure of an import call."""

    status: int = 500
    client_fault: bool = False

    def __init__(self, message: str = _INTERNAL_MESSAGE):
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        """Message safe to return to the caller."""
        if self.client_fault:
            return self.message
        return _INTERNAL_MESSAGE


class OwnershipError(VaultImportError):
    """A cipher in the bundle was encrypted for a different user."""

    status = 400
    client_fault = True


class BundleValidationError(VaultImportError):
    """The bundle is structurally unacceptable (size, indices, body)."""

    status = 400
    client_fault = True


class RelationshipError(BundleValidationError):
    """A folder relationship points outside the bundle (strict mode only)."""


class SerializationError(VaultImportError):
    """A cipher payload could not be encoded for storage."""


class StorageError(VaultImportError):
    """A bulk write to storage failed."""
