from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError

# Failures raised by store calls, including token refresh.
STORE_ERRORS = (GoogleAPIError, GoogleAuthError)


class FirestoreIOError(Exception):
    """Base class for errors reported to the user by firestore-io."""


class ConfigurationError(FirestoreIOError):
    """Raised when credentials or flags are missing or unusable."""


class ExportError(FirestoreIOError):
    """Raised when reading a collection from the store fails."""

    def __init__(self, path: str, message: str = ""):
        self.path = path
        super().__init__(message or f"Failed to export collection {path}")


class ImportWriteError(FirestoreIOError):
    """Raised when writing a document to the store fails."""

    def __init__(self, path: str, message: str = ""):
        self.path = path
        super().__init__(message or f"Failed to write document {path}")


class MalformedFileError(FirestoreIOError):
    """Raised when an import file is not valid JSON or has the wrong shape."""
