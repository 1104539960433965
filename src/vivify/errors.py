"""Vivify Error Classes."""

from __future__ import annotations

from vivify.types import ErrorCode


class VivifyError(Exception):
    """Base error for all vivify errors."""

    def __init__(self, message: str, code: ErrorCode = "UNKNOWN_ERROR") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ArgumentError(VivifyError, ValueError):
    """Raised when construction or overlay arguments are malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, "INVALID_ARGUMENT")


class UnresolvedTypeError(VivifyError, LookupError):
    """Raised when a declared child names a type that is not registered."""

    def __init__(self, type_name: str, owner: str | None = None) -> None:
        where = f" (declared by {owner})" if owner else ""
        super().__init__(f'Unable to resolve child type "{type_name}"{where}', "UNRESOLVED_TYPE")
        self.type_name = type_name
        self.owner = owner


class UnknownPropertyError(VivifyError, AttributeError):
    """Raised in strict mode when an undeclared property is read or written."""

    def __init__(self, type_name: str, name: str) -> None:
        super().__init__(f"'{type_name}' object has no declared property '{name}'", "UNKNOWN_PROPERTY")
        self.name = name


class DeclaredOperationError(VivifyError, AttributeError):
    """Raised when attribute assignment targets a declared operation."""

    def __init__(self, type_name: str, name: str) -> None:
        super().__init__(
            f"'{name}' is a declared operation of '{type_name}' and cannot be assigned; "
            f"use obj.set('{name}', value) to store it as a property",
            "DECLARED_OPERATION",
        )
        self.name = name
