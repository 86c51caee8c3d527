"""Custom exceptions for the kv_cookie_store package."""

from __future__ import annotations

from typing import Any


class CookieStoreError(Exception):
    """Base exception for all cookie-store errors."""


class CookieDecodeError(CookieStoreError):
    """Raised when a stored record cannot be turned back into a cookie."""

    def __init__(self, record: Any, detail: str = "") -> None:
        self.record = record
        msg = "Cannot decode cookie record"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class EngineError(CookieStoreError):
    """Raised when an engine operation fails."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        msg = f"Engine error during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class EngineClosedError(EngineError):
    """Raised when an engine is used after it was closed."""

    def __init__(self, operation: str) -> None:
        super().__init__(operation, "engine is closed")


class StoreConfigError(CookieStoreError):
    """Raised when a cookie store is misconfigured."""
