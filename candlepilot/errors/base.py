"""Base error type tagged with the environment it originated from."""

from enum import Enum
from typing import Any, Optional


class ErrorEnvironment(str, Enum):
    """Where an error was raised."""
    CORE = "core"
    CONFIG = "config"
    HISTORY = "history"
    TRANSPORT = "transport"


class EngineError(Exception):
    """Base class for all errors raised by the execution core."""

    def __init__(
        self,
        message: str,
        environment: ErrorEnvironment = ErrorEnvironment.CORE,
        context: Optional[dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.environment = environment
        self.context = context or {}
        self.recoverable = True

    def __str__(self) -> str:
        return f"[{self.environment.value}] {self.message}"
