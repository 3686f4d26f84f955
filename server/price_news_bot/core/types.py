"""
Core Exceptions

Error taxonomy for the market update run. Per-asset failures are contained
by the pipeline; only the errors that end a run reach the entry point.
"""
from __future__ import annotations

from typing import Any, Optional


class PriceNewsBotError(Exception):
    """Base exception for all price news bot errors."""

    def __init__(
        self,
        message: str,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class UpstreamError(PriceNewsBotError):
    """Raised when the Treza API is unreachable or rejects a request."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        status_text: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        ctx = context or {}
        ctx["service"] = "treza"
        if status is not None:
            ctx["status"] = status
        super().__init__(message, ctx)
        self.status = status
        self.status_text = status_text


class PublishError(PriceNewsBotError):
    """Raised when the post cannot be sent to X."""


class NoAnalysisError(PriceNewsBotError):
    """Raised when no tracked asset produced a valid analysis."""

    def __init__(
        self,
        message: str,
        symbols: tuple[str, ...] = (),
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        ctx = context or {}
        if symbols:
            ctx["symbols"] = ",".join(symbols)
        super().__init__(message, ctx)
        self.symbols = symbols

