"""View-model helpers for the server-rendered checker page and report history.

Everything here is pure: dicts in, dicts out. Templates only read the keys.
"""

from typing import Any, Dict, List, Optional

from .domain.schemas import expected_urgency_level

_SEVERITY = {
    'low': {'color': '#10b981', 'bg': 'rgba(16, 185, 129, 0.1)', 'icon': 'check-circle', 'label': 'Low'},
    'moderate': {'color': '#f59e0b', 'bg': 'rgba(245, 158, 11, 0.1)', 'icon': 'alert-circle', 'label': 'Moderate'},
    'high': {'color': '#f97316', 'bg': 'rgba(249, 115, 22, 0.1)', 'icon': 'alert-triangle', 'label': 'High'},
    'critical': {'color': '#ef4444', 'bg': 'rgba(239, 68, 68, 0.1)', 'icon': 'x-circle', 'label': 'Critical'},
}
_SEVERITY_UNKNOWN = {'color': '#6b7280', 'bg': 'rgba(107, 114, 128, 0.1)', 'icon': 'alert-circle', 'label': 'Unknown'}

_URGENCY = {
    'low': {'color': '#10b981', 'label': 'Low Urgency', 'bg': 'linear-gradient(135deg, #10b981, #059669)'},
    'moderate': {'color': '#f59e0b', 'label': 'Moderate Urgency', 'bg': 'linear-gradient(135deg, #f59e0b, #d97706)'},
    'high': {'color': '#f97316', 'label': 'High Urgency', 'bg': 'linear-gradient(135deg, #f97316, #ea580c)'},
    'emergency': {'color': '#ef4444', 'label': 'Emergency', 'bg': 'linear-gradient(135deg, #ef4444, #dc2626)'},
}
_URGENCY_UNKNOWN = {'color': '#6b7280', 'label': 'Urgency unavailable', 'bg': 'linear-gradient(135deg, #6b7280, #4b5563)'}

# Diagnoses above this confidence get the "likely" marker in the history view
HIGH_CONFIDENCE = 0.7


def severity_config(severity: Optional[str]) -> Dict[str, str]:
    return dict(_SEVERITY.get((severity or '').lower(), _SEVERITY_UNKNOWN))


def urgency_config(score: Optional[int], level: Optional[str] = None) -> Dict[str, str]:
    """Display config for the urgency banner.

    The score decides the band (<=3 low, <=5 moderate, <=7 high, else
    emergency). Without a score, the model's own ``urgencyLevel`` is used.
    """
    if score is not None:
        return dict(_URGENCY[expected_urgency_level(score)])
    return dict(_URGENCY.get((level or '').lower(), _URGENCY_UNKNOWN))


def build_condition_cards(conditions: List[Dict[str, Any]], expanded: Optional[int] = 0) -> List[Dict[str, Any]]:
    """One card per condition; at most one of them (``expanded``) is open."""
    cards = []
    for index, condition in enumerate(conditions or []):
        confidence = condition.get('confidence')
        cards.append({
            'index': index,
            'name': condition.get('name', ''),
            'description': condition.get('description', ''),
            'confidence': confidence,
            'confidence_width': max(0, min(100, confidence)) if isinstance(confidence, int) else 0,
            'severity': severity_config(condition.get('severity')),
            'matched_symptoms': condition.get('matchedSymptoms') or [],
            'additional_symptoms': condition.get('additionalSymptoms') or [],
            'recommended_actions': condition.get('recommendedActions') or [],
            'expanded': expanded is not None and index == expanded,
        })
    return cards


def diagnosis_rows(output: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    output = output or {}
    levels = output.get('confidenceLevels') or []
    rows = []
    for index, name in enumerate(output.get('potentialDiagnoses') or []):
        level = levels[index] if index < len(levels) else None
        rows.append({
            'name': name,
            'confidence': level,
            'percent': round(level * 100) if isinstance(level, (int, float)) else None,
            'likely': isinstance(level, (int, float)) and level > HIGH_CONFIDENCE,
        })
    return rows


def results_context(analysis: Dict[str, Any], analyzed_symptoms: List[str], expanded: Optional[int] = 0) -> Dict[str, Any]:
    """Template context for the Success state of the checker page."""
    return {
        'analyzed_symptoms': analyzed_symptoms,
        'urgency_score': analysis.get('urgencyScore'),
        'urgency': urgency_config(analysis.get('urgencyScore'), analysis.get('urgencyLevel')),
        'cards': build_condition_cards(analysis.get('conditions') or [], expanded),
        'general_recommendations': analysis.get('generalRecommendations') or [],
        'when_to_seek_help': analysis.get('whenToSeekHelp') or [],
        'disclaimer': analysis.get('disclaimer') or '',
    }
