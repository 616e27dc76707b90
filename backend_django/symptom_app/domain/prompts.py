"""Fixed prompt templates sent to the hosted model.

Templates use literal ``{placeholder}`` markers filled in a single regex pass
(not ``.format``) because they embed example JSON with braces.
"""

from __future__ import annotations

import re
from typing import Mapping, Optional, Sequence

SYMPTOM_LIST_TEMPLATE = """You are a medical AI assistant. Analyze the following symptoms and provide possible health conditions.

SYMPTOMS: {symptoms}

Respond ONLY with valid JSON in this exact format (no markdown, no code blocks, just raw JSON):
{
  "conditions": [
    {
      "name": "Condition Name",
      "description": "Brief description of the condition",
      "confidence": 85,
      "severity": "moderate",
      "matchedSymptoms": ["symptom1", "symptom2"],
      "additionalSymptoms": ["other symptoms to watch for"],
      "recommendedActions": ["action1", "action2"]
    }
  ],
  "urgencyScore": 6,
  "urgencyLevel": "moderate",
  "generalRecommendations": ["general advice 1", "general advice 2"],
  "disclaimer": "This is not a substitute for professional medical advice.",
  "whenToSeekHelp": ["warning sign 1", "warning sign 2"]
}

Rules:
- Provide 3-5 possible conditions
- Confidence should be a number 0-100
- Severity can be: "low", "moderate", "high", "critical"
- Urgency score is 1-10 (1=not urgent, 10=emergency)
- Urgency level can be: "low", "moderate", "high", "emergency"
- Be thorough but concise
- Always include safety disclaimers"""

DESCRIPTION_TEMPLATE = """You are a medical AI assistant that analyzes symptoms and medical scan findings described by users and suggests potential diagnoses.

Consider the following information provided by the user:

Symptom Description: {description}
{scan_findings}{report_file}

Based on all this information, provide a list of potential diagnoses, along with confidence levels (0-1) for each diagnosis. Also include any additional notes or recommendations.
Ensure that the diagnoses are relevant to the symptoms and scan findings provided.

Respond ONLY with valid JSON in this exact format (no markdown, no code blocks, just raw JSON):
{
  "potentialDiagnoses": ["Diagnosis 1", "Diagnosis 2"],
  "confidenceLevels": [0.7, 0.4],
  "additionalNotes": "Additional notes or recommendations."
}

Rules:
- confidenceLevels must have one entry per diagnosis, in the same order
- Confidence levels are numbers between 0 and 1"""

IMPROVE_DESCRIPTION_TEMPLATE = """You are a medical intake assistant. Rewrite the symptom description below so it is clear, specific and well organised for a clinician.
Keep every fact the user gave (onset, duration, location, severity, triggers). Do not add symptoms, diagnoses or advice.

Symptom Description: {description}

Respond ONLY with valid JSON in this exact format (no markdown, no code blocks, just raw JSON):
{
  "improvedDescription": "The rewritten description"
}"""


def _fill(template: str, values: Mapping[str, str]) -> str:
    # One pass, so text inserted for one placeholder is never re-scanned
    pattern = re.compile("|".join(re.escape("{" + key + "}") for key in values))
    return pattern.sub(lambda m: values[m.group(0)[1:-1]], template)


def build_symptom_list_prompt(symptoms: Sequence[str]) -> str:
    return _fill(SYMPTOM_LIST_TEMPLATE, {'symptoms': ", ".join(symptoms)})


def build_description_prompt(
    description: str,
    scan_findings: Optional[str] = None,
    has_report_file: bool = False,
) -> str:
    findings = f"Medical Scan Findings: {scan_findings}\n" if scan_findings else ""
    if has_report_file:
        report_file = ("Medical Report File (Image or PDF): attached.\n"
                       "(Analyze the contents of this file, including any text or visual data, as part of the medical report.)")
    else:
        report_file = "No medical report file provided."
    return _fill(DESCRIPTION_TEMPLATE, {
        'description': description,
        'scan_findings': findings,
        'report_file': report_file,
    })


def build_improve_description_prompt(description: str) -> str:
    return _fill(IMPROVE_DESCRIPTION_TEMPLATE, {'description': description})
