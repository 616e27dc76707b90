"""Symptom tag collection: trimming, case-insensitive uniqueness and suggestions."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

COMMON_SYMPTOMS = [
    'Headache', 'Fever', 'Fatigue', 'Cough', 'Nausea',
    'Dizziness', 'Chest Pain', 'Shortness of Breath', 'Back Pain',
    'Sore Throat', 'Runny Nose', 'Body Aches', 'Chills', 'Vomiting',
]

_SPLIT_RE = re.compile(r"[,\n]")


def add_symptom(symptoms: List[str], symptom: str) -> List[str]:
    """Return a new list with ``symptom`` appended unless blank or already present."""
    trimmed = (symptom or '').strip()
    if not trimmed:
        return list(symptoms)
    lowered = {s.lower() for s in symptoms}
    if trimmed.lower() in lowered:
        return list(symptoms)
    return [*symptoms, trimmed]


def unique_symptoms(items: Iterable[str]) -> List[str]:
    result: List[str] = []
    for item in items:
        result = add_symptom(result, item)
    return result


def split_symptom_text(text: str) -> List[str]:
    """Split free text typed into the tag box ("fever, cough\\nnausea")."""
    return [part.strip() for part in _SPLIT_RE.split(text or '') if part.strip()]


def suggest_symptoms(query: str, selected: Optional[Iterable[str]] = None, limit: int = 8) -> List[str]:
    chosen = {s.lower() for s in (selected or [])}
    q = (query or '').strip().lower()
    pool = [s for s in COMMON_SYMPTOMS if s.lower() not in chosen]
    if q:
        pool = [s for s in pool if q in s.lower()]
    return pool[:max(0, limit)]
