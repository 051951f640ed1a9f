"""Normalized error hierarchy for pixeldrain_fs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from pixeldrain_fs._models import FilesystemNode


class PixeldrainError(Exception):
    """Base class for all pixeldrain_fs errors.

    :param message: Human-readable error description.
    :param path: The path involved in the error, if any.
    :param backend: The backend name involved, if any.
    """

    def __init__(self, message: str = "", *, path: Optional[str] = None, backend: Optional[str] = None) -> None:
        self.path = path
        self.backend = backend
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.path is not None:
            parts.append(f"path={self.path!r}")
        if self.backend is not None:
            parts.append(f"backend={self.backend!r}")
        return " | ".join(parts) if len(parts) > 1 else parts[0]

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(super().__str__())]
        if self.path is not None:
            args.append(f"path={self.path!r}")
        if self.backend is not None:
            args.append(f"backend={self.backend!r}")
        return f"{cls}({', '.join(args)})"


class NotFound(PixeldrainError):
    """Raised when a path does not exist at the remote."""


class DirNotFound(NotFound):
    """Raised by directory operations when the directory does not exist."""


class ObjectNotFound(NotFound):
    """Raised by object lookups when the object does not exist."""


class AlreadyExists(PixeldrainError):
    """Raised when a create or rename target already exists."""


class DirExists(AlreadyExists):
    """Raised when a directory move targets an existing path."""


class IsDirectory(PixeldrainError):
    """Raised when an object-only operation resolves to a directory."""


class CantMove(PixeldrainError):
    """Raised when a move cannot be performed server-side."""


class InvalidPath(PixeldrainError):
    """Raised for malformed or unsafe paths."""


class AuthenticationRequired(PixeldrainError):
    """Raised when the credentials are rejected or a bucket needs a login."""


class CapabilityNotSupported(PixeldrainError):
    """Raised when an operation requires an unsupported capability.

    :param capability: The name of the unsupported capability.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        backend: Optional[str] = None,
        capability: str = "",
    ) -> None:
        self.capability = capability
        super().__init__(message, path=path, backend=backend)

    def __str__(self) -> str:
        base = super().__str__()
        if self.capability:
            if base:
                return f"{base} | capability={self.capability!r}"
            return f"capability={self.capability!r}"
        return base

    def __repr__(self) -> str:
        cls = type(self).__name__
        args = [repr(self.args[0] if self.args else "")]
        if self.path is not None:
            args.append(f"path={self.path!r}")
        if self.backend is not None:
            args.append(f"backend={self.backend!r}")
        if self.capability:
            args.append(f"capability={self.capability!r}")
        return f"{cls}({', '.join(args)})"


class BackendUnavailable(PixeldrainError):
    """Raised when the API cannot be reached."""


class DeadlineExceeded(BackendUnavailable):
    """Raised when a request does not complete within its timeout."""


class ApiError(PixeldrainError):
    """Unclassified error response from the API.

    :param status: HTTP status code of the response.
    :param value: Machine-readable error code from the response body, if any.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        backend: Optional[str] = None,
        status: int = 0,
        value: str = "",
    ) -> None:
        self.status = status
        self.value = value
        super().__init__(message, path=path, backend=backend)


class PartialWrite(PixeldrainError):
    """Raised when an upload succeeded but its follow-up metadata update failed.

    The content exists at the remote; only its modification time may be wrong.

    :param uploaded: The node returned by the upload.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str] = None,
        backend: Optional[str] = None,
        uploaded: Optional[FilesystemNode] = None,
    ) -> None:
        self.uploaded = uploaded
        super().__init__(message, path=path, backend=backend)
