"""Turn a model's free-text reply into a validated structure.

The model is asked for bare JSON but is not guaranteed to comply, so every
reply goes through the same three steps:

1. strip a leading/trailing markdown code fence (```json ... ```),
2. parse the remainder as JSON (ResponseParseError on failure, no recovery),
3. validate the object against a DRF serializer (ResponseSchemaError).
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any, Dict, Type

from rest_framework import serializers

from .errors import ResponseParseError, ResponseSchemaError
from .schemas import (
    AnalysisResultSerializer,
    DiagnosisOutputSerializer,
    ImprovedDescriptionSerializer,
)

_LEADING_FENCE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(raw_text: str) -> str:
    text = (raw_text or '').strip()
    text = _LEADING_FENCE.sub('', text, count=1)
    text = _TRAILING_FENCE.sub('', text, count=1)
    return text.strip()


def parse_model_json(raw_text: str) -> Any:
    cleaned = strip_code_fences(raw_text)
    try:
        return json.loads(cleaned)
    except (TypeError, ValueError) as e:
        raise ResponseParseError(raw_text, str(e)) from e


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def validate_payload(payload: Any, serializer_class: Type[serializers.Serializer], raw_text: str = '') -> Dict[str, Any]:
    if not isinstance(payload, Mapping):
        raise ResponseSchemaError(
            {'non_field_errors': [f"Expected a JSON object, got {type(payload).__name__}."]},
            raw_text,
        )
    serializer = serializer_class(data=payload)
    if not serializer.is_valid():
        raise ResponseSchemaError(_plain(serializer.errors), raw_text)
    return _plain(serializer.data)


def normalize_response(raw_text: str, serializer_class: Type[serializers.Serializer]) -> Dict[str, Any]:
    return validate_payload(parse_model_json(raw_text), serializer_class, raw_text)


def normalize_symptom_analysis(raw_text: str) -> Dict[str, Any]:
    return normalize_response(raw_text, AnalysisResultSerializer)


def normalize_diagnosis_output(raw_text: str) -> Dict[str, Any]:
    return normalize_response(raw_text, DiagnosisOutputSerializer)


def normalize_improved_description(raw_text: str) -> str:
    return normalize_response(raw_text, ImprovedDescriptionSerializer)['improvedDescription']
