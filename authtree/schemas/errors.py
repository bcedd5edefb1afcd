"""
Schemas
File: errors.py

Purpose: Error taxonomy for the authenticated tree.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Index & Shape Errors
    INVALID_INDEX = "INVALID_INDEX"
    INVALID_LEAF_INDEX = "INVALID_LEAF_INDEX"
    INVALID_DEPTH = "INVALID_DEPTH"

    # Hash & Commitment Errors
    INVALID_HASH = "INVALID_HASH"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"

    # Storage Errors
    STORAGE_ERROR = "STORAGE_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AuthTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the CLI and the HTTP API to report failures without
    leaking exception objects.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_LEAF_INDEX],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "AuthTreeException":
        """Convert this error model to a raised exception."""
        return AuthTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AuthTreeException(Exception):
    """
    Base exception for all authenticated tree errors.

    Carries structured error information and can be converted
    to an AuthTreeError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "AUTHTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AuthTreeError:
        """Convert this exception to an AuthTreeError model."""
        return AuthTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class MerkleException(AuthTreeException):
    """
    Exception raised by tree operations.

    Attached to the offending node index and, where available, the
    hash that was being looked up or checked.
    """

    def __init__(
        self,
        message: str,
        code: str,
        index: int,
        source: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["index"] = index
        if source is not None:
            full_details["source"] = source.hex() if isinstance(source, bytes) else repr(source)
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )
        self.index = index
        self.source = source


class InvalidIndexError(MerkleException):
    """Index lies outside the tree for its depth."""

    def __init__(self, index: int, depth: int | None = None, source: Any = None) -> None:
        details = {"depth": depth} if depth is not None else None
        super().__init__(
            message=f"Invalid node index {index}" + (f" for depth {depth}" if depth is not None else ""),
            code=ErrorCodes.INVALID_INDEX,
            index=index,
            source=source,
            details=details,
        )


class InvalidLeafIndexError(MerkleException):
    """Index is not within the leaf range."""

    def __init__(self, index: int, depth: int, source: Any = None) -> None:
        super().__init__(
            message=f"Index {index} is not a leaf for depth {depth}",
            code=ErrorCodes.INVALID_LEAF_INDEX,
            index=index,
            source=source,
            details={"depth": depth},
        )


class InvalidDepthError(MerkleException):
    """Proof shape or tree depth does not match the expected depth."""

    def __init__(
        self,
        index: int,
        expected: int,
        actual: int,
        source: Any = None,
        message: str | None = None,
    ) -> None:
        super().__init__(
            message=message or f"Expected depth {expected}, got {actual}",
            code=ErrorCodes.INVALID_DEPTH,
            index=index,
            source=source,
            details={"expected": expected, "actual": actual},
        )


class InvalidHashError(MerkleException):
    """A fetched or recomputed hash does not match the expected value."""

    def __init__(self, index: int, source: Any = None, reason: str = "hash mismatch") -> None:
        super().__init__(
            message=f"Invalid hash at index {index}: {reason}",
            code=ErrorCodes.INVALID_HASH,
            index=index,
            source=source,
        )


class InvalidArgumentException(AuthTreeException):
    """Exception raised when a payload is malformed for hashing or leaf assignment."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ARGUMENT,
            details=details,
            retryable=False,
        )


class StorageException(AuthTreeException):
    """Exception raised when a node store cannot be read or written."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.STORAGE_ERROR,
            details=full_details,
            retryable=retryable,
        )
