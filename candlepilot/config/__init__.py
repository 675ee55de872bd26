"""Strategy configuration: defaults, validation and YAML loading."""

from .defaults import EngineOptions, InstrumentType
from .loader import ConfigLoader
from .validation import ConfigValidator, ValidationError

__all__ = ["EngineOptions", "InstrumentType", "ConfigLoader", "ConfigValidator", "ValidationError"]
