import json

import pytest

from symptom_app.domain.errors import ResponseParseError, ResponseSchemaError, summarize_errors
from symptom_app.domain.normalizer import (
    normalize_diagnosis_output,
    normalize_improved_description,
    normalize_symptom_analysis,
    strip_code_fences,
)
from symptom_app.domain.schemas import expected_urgency_level

from .conftest import make_analysis, make_condition


def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}```') == '{"a": 1}'
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


def test_fenced_and_bare_replies_normalize_identically():
    body = json.dumps(make_analysis())
    assert normalize_symptom_analysis(f"```json\n{body}\n```") == normalize_symptom_analysis(body)


def test_refusal_text_is_a_parse_error():
    with pytest.raises(ResponseParseError) as exc_info:
        normalize_symptom_analysis("I cannot answer that.")
    assert exc_info.value.raw_text == "I cannot answer that."


def test_conditions_and_urgency_are_preserved():
    payload = make_analysis(n_conditions=4, urgency_score=6, urgency_level='moderate')
    result = normalize_symptom_analysis(json.dumps(payload))
    assert len(result['conditions']) == 4
    assert [c['name'] for c in result['conditions']] == [c['name'] for c in payload['conditions']]
    assert result['urgencyScore'] == 6


def test_enum_values_are_lowercased():
    payload = make_analysis()
    payload['conditions'][0]['severity'] = 'High'
    payload['urgencyLevel'] = ' Emergency '
    result = normalize_symptom_analysis(json.dumps(payload))
    assert result['conditions'][0]['severity'] == 'high'
    assert result['urgencyLevel'] == 'emergency'


def test_missing_optional_fields_get_defaults():
    result = normalize_symptom_analysis(json.dumps({'conditions': [{'name': 'Common cold'}]}))
    condition = result['conditions'][0]
    assert condition['matchedSymptoms'] == []
    assert condition['confidence'] is None
    assert result['urgencyScore'] is None
    assert result['generalRecommendations'] == []


@pytest.mark.parametrize('mutate', [
    lambda p: p.update(conditions=[]),
    lambda p: p.update(urgencyScore=11),
    lambda p: p.update(urgencyLevel='whenever'),
    lambda p: p['conditions'][0].update(severity='catastrophic'),
    lambda p: p['conditions'][0].update(confidence=140),
    lambda p: p['conditions'][0].pop('name'),
])
def test_schema_violations_are_rejected(mutate):
    payload = make_analysis()
    mutate(payload)
    with pytest.raises(ResponseSchemaError):
        normalize_symptom_analysis(json.dumps(payload))


def test_non_object_reply_is_a_schema_error():
    with pytest.raises(ResponseSchemaError) as exc_info:
        normalize_symptom_analysis(json.dumps([make_condition('Flu')]))
    assert 'Expected a JSON object' in summarize_errors(exc_info.value.details)


def test_diagnosis_output_without_confidence_levels():
    result = normalize_diagnosis_output('{"potentialDiagnoses": ["Migraine"]}')
    assert result == {'potentialDiagnoses': ['Migraine']}


def test_diagnosis_output_length_mismatch_is_rejected():
    reply = json.dumps({'potentialDiagnoses': ['Migraine', 'Sinusitis'], 'confidenceLevels': [0.9]})
    with pytest.raises(ResponseSchemaError) as exc_info:
        normalize_diagnosis_output(reply)
    assert 'confidenceLevels' in summarize_errors(exc_info.value.details)


def test_diagnosis_output_requires_a_diagnosis():
    with pytest.raises(ResponseSchemaError):
        normalize_diagnosis_output('{"potentialDiagnoses": []}')


def test_improved_description():
    assert normalize_improved_description('{"improvedDescription": "Clear text."}') == 'Clear text.'


@pytest.mark.parametrize('score,level', [(1, 'low'), (3, 'low'), (4, 'moderate'), (5, 'moderate'),
                                         (6, 'high'), (7, 'high'), (8, 'emergency'), (10, 'emergency')])
def test_expected_urgency_level(score, level):
    assert expected_urgency_level(score) == level


def test_summarize_errors_flattens_nested_details():
    details = {'conditions': [{}, {'severity': ['"x" is not a valid choice.']}]}
    assert summarize_errors(details) == 'conditions.1.severity: "x" is not a valid choice.'
