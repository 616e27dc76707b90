from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence

from ..ports.ai_services import TextGenerator
from ...domain.errors import InputValidationError, ResponseParseError, ResponseSchemaError
from ...domain.normalizer import normalize_symptom_analysis
from ...domain.prompts import build_symptom_list_prompt
from ...domain.symptoms import unique_symptoms

logger = logging.getLogger(__name__)


@dataclass
class SymptomListAnalysis:
    analysis: Dict[str, Any]
    analyzed_symptoms: List[str]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_response(self) -> Dict[str, Any]:
        return {
            'success': True,
            'analysis': self.analysis,
            'analyzedSymptoms': self.analyzed_symptoms,
            'timestamp': self.timestamp.isoformat().replace('+00:00', 'Z'),
        }


class AnalyzeSymptomList:
    """Tag-based checker: symptom list -> prompt -> model -> validated conditions."""

    def __init__(self, generator: TextGenerator) -> None:
        self.generator = generator

    def execute(self, symptoms: Sequence[str]) -> SymptomListAnalysis:
        cleaned = unique_symptoms(s for s in symptoms if isinstance(s, str))
        if not cleaned:
            raise InputValidationError("Please provide at least one symptom")

        raw = self.generator.generate(build_symptom_list_prompt(cleaned))
        try:
            analysis = normalize_symptom_analysis(raw)
        except (ResponseParseError, ResponseSchemaError) as e:
            logger.error("Failed to parse AI response: %s\nRaw response: %s", e, raw)
            raise
        return SymptomListAnalysis(analysis=analysis, analyzed_symptoms=cleaned)
