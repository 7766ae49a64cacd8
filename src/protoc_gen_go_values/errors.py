from __future__ import annotations


class ValueSlicesError(Exception):
    """Base class for failures that abort a single generation run."""


class InvalidInputError(ValueSlicesError):
    """Raised when a required argument is missing or the request is malformed."""


class UpstreamFailureError(ValueSlicesError):
    """Raised when the base generator cannot be run or returns bad output."""


class SerializationFailureError(ValueSlicesError):
    """Raised when the final CodeGeneratorResponse cannot be encoded."""
