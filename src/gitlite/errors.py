"""
Error types for object store operations.

All errors are explicit and never silent.
"""


class GitliteError(Exception):
    """Base exception for all object store errors."""
    pass


class InvalidHashError(GitliteError):
    """Raised when an object hash is not a 40-character hex string."""

    def __init__(self, object_hash: str):
        self.object_hash = object_hash
        if len(object_hash) != 40:
            self.reason = f"expected 40 characters, got {len(object_hash)}"
        else:
            self.reason = "expected only lowercase hex characters"
        super().__init__(f"Invalid hash: {self.reason}: {object_hash!r}")


class ObjectNotFoundError(GitliteError):
    """Raised when a requested object does not exist."""

    def __init__(self, object_hash: str, path: str = None):
        self.object_hash = object_hash
        self.path = path
        msg = f"Object not found: {object_hash}"
        if path:
            msg += f" (path: {path})"
        super().__init__(msg)


class ObjectDecodeError(GitliteError):
    """Raised when a stored object is not a valid compressed stream."""

    def __init__(self, reason: str, object_hash: str = None):
        self.reason = reason
        self.object_hash = object_hash
        msg = f"Cannot decode object: {reason}"
        if object_hash:
            msg += f" (hash: {object_hash})"
        super().__init__(msg)


class InvalidObjectError(GitliteError):
    """Raised when an object is malformed or invalid."""

    def __init__(self, reason: str, object_hash: str = None):
        self.reason = reason
        self.object_hash = object_hash
        msg = f"Invalid object: {reason}"
        if object_hash:
            msg += f" (hash: {object_hash})"
        super().__init__(msg)


class TypeMismatchError(GitliteError):
    """Raised when a stored object's type tag is not the one requested."""

    def __init__(self, object_hash: str, expected: str, actual: str):
        self.object_hash = object_hash
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Object {object_hash} has type {actual!r}, expected {expected!r}"
        )


class TruncatedPayloadError(GitliteError):
    """Raised when a tree entry ends in the middle of a field."""

    def __init__(self, field: str, offset: int):
        self.field = field
        self.offset = offset
        super().__init__(f"Truncated tree payload: incomplete {field} at offset {offset}")


class ObjectCorruptedError(GitliteError):
    """Raised when an object's content does not match its hash."""

    def __init__(self, object_hash: str, actual: str):
        self.object_hash = object_hash
        self.expected = object_hash
        self.actual = actual
        super().__init__(
            f"Object corrupted: {object_hash}\n"
            f"Expected hash: {object_hash}\n"
            f"Actual hash: {actual}"
        )


class AlreadyInitializedError(GitliteError):
    """Raised when init is called twice on the same repository handle."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Repository already initialized: {path}")


class StorageError(GitliteError):
    """Raised when filesystem operations fail."""

    def __init__(self, operation: str, path: str, cause: Exception = None):
        self.operation = operation
        self.path = path
        self.cause = cause
        msg = f"Storage error during {operation}: {path}"
        if cause:
            msg += f"\nCause: {cause}"
        super().__init__(msg)
