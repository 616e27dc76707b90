"""Error taxonomy shared by the use cases, actions and views."""

from __future__ import annotations

from typing import Any, Optional


class SymptomCheckerError(Exception):
    """Base class for every failure surfaced to a caller."""


class InputValidationError(SymptomCheckerError):
    """Input rejected before any external call."""

    def __init__(self, message: str, detail: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ConfigurationError(SymptomCheckerError):
    """A required credential or setting is missing."""


class ModelInvocationError(SymptomCheckerError):
    """The hosted model call failed (network, quota, SDK error)."""


class ResponseParseError(SymptomCheckerError):
    """The model reply is not JSON. Keeps the raw text for logging only."""

    def __init__(self, raw_text: str, reason: str = '') -> None:
        super().__init__(f"Model response is not valid JSON: {reason}" if reason else "Model response is not valid JSON")
        self.raw_text = raw_text
        self.reason = reason


class ResponseSchemaError(SymptomCheckerError):
    """The model reply is JSON but does not match the expected shape."""

    def __init__(self, details: Any, raw_text: str = '') -> None:
        super().__init__(f"Model response does not match the expected schema: {details}")
        self.details = details
        self.raw_text = raw_text


class StoreError(SymptomCheckerError):
    """The report store rejected a read or write; message is shown as-is."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def summarize_errors(details: Any, prefix: str = '') -> str:
    """Flatten serializer-style error dicts into "field: message; ..." text."""
    if isinstance(details, dict):
        parts = [summarize_errors(v, f"{prefix}{k}." if k != 'non_field_errors' else prefix) for k, v in details.items()]
        return '; '.join(p for p in parts if p)
    if isinstance(details, (list, tuple)):
        if all(isinstance(d, str) for d in details):
            label = prefix.rstrip('.')
            text = ' '.join(str(d) for d in details)
            return f"{label}: {text}" if label else text
        return '; '.join(
            p for p in (summarize_errors(d, f"{prefix}{i}.") for i, d in enumerate(details)) if p
        )
    label = prefix.rstrip('.')
    return f"{label}: {details}" if label else str(details)
