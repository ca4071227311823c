from .errors import (
    CompactionError,
    ConfigurationError,
    InputError,
    InvariantViolation,
    StoreIOError,
)

__all__ = [
    "utils",
    "errors",
    "genesis",
    "encoding",
    "codestore",
    "compactor",
    "projector",
    "writer",
    "loader",
    "expand",
    "config",
    "pipeline",
    "cli",
    "CompactionError",
    "ConfigurationError",
    "InputError",
    "InvariantViolation",
    "StoreIOError",
]
