from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..ports.ai_services import TextGenerator
from ...domain.attachments import DEFAULT_MAX_BYTES, parse_data_uri
from ...domain.errors import InputValidationError, ResponseParseError, ResponseSchemaError
from ...domain.normalizer import normalize_diagnosis_output, normalize_improved_description
from ...domain.prompts import build_description_prompt, build_improve_description_prompt

logger = logging.getLogger(__name__)

DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 5000
SCAN_FINDINGS_MAX_LENGTH = 3000


@dataclass
class AnalyzeDescriptionInput:
    symptom_description: str
    scan_findings_description: Optional[str] = None
    report_file_data_uri: Optional[str] = None


def validate_description(description: Optional[str]) -> str:
    text = (description or '').strip()
    if len(text) < DESCRIPTION_MIN_LENGTH:
        raise InputValidationError(
            f"Please describe your symptoms in at least {DESCRIPTION_MIN_LENGTH} characters."
        )
    if len(text) > DESCRIPTION_MAX_LENGTH:
        raise InputValidationError(
            f"Symptom description must be at most {DESCRIPTION_MAX_LENGTH} characters."
        )
    return text


def validate_scan_findings(findings: Optional[str]) -> Optional[str]:
    text = (findings or '').strip()
    if len(text) > SCAN_FINDINGS_MAX_LENGTH:
        raise InputValidationError(
            f"Scan findings description must be at most {SCAN_FINDINGS_MAX_LENGTH} characters."
        )
    return text or None


class AnalyzeSymptomDescription:
    """Free-text diagnosis assistant (description + scan findings + optional report file)."""

    def __init__(self, generator: TextGenerator, max_file_bytes: int = DEFAULT_MAX_BYTES) -> None:
        self.generator = generator
        self.max_file_bytes = max_file_bytes

    def execute(self, inp: AnalyzeDescriptionInput) -> Dict[str, Any]:
        description = validate_description(inp.symptom_description)
        findings = validate_scan_findings(inp.scan_findings_description)
        attachments = []
        if inp.report_file_data_uri:
            attachments.append(parse_data_uri(inp.report_file_data_uri, self.max_file_bytes))

        prompt = build_description_prompt(description, findings, has_report_file=bool(attachments))
        raw = self.generator.generate(prompt, attachments)
        try:
            return normalize_diagnosis_output(raw)
        except (ResponseParseError, ResponseSchemaError) as e:
            logger.error("Failed to parse AI response: %s\nRaw response: %s", e, raw)
            raise


class ImproveSymptomDescription:
    def __init__(self, generator: TextGenerator) -> None:
        self.generator = generator

    def execute(self, description: str) -> str:
        text = (description or '').strip()
        if not text:
            raise InputValidationError("Please enter your symptoms first.")
        raw = self.generator.generate(build_improve_description_prompt(text))
        try:
            return normalize_improved_description(raw)
        except (ResponseParseError, ResponseSchemaError) as e:
            logger.error("Failed to parse AI response: %s\nRaw response: %s", e, raw)
            raise
