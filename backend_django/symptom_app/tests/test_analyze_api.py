import json

import pytest

from symptom_app.domain.errors import ModelInvocationError

pytestmark = pytest.mark.django_db

URL = '/api/analyze'


def test_analyze_end_to_end(api_client, fake_generator, analysis_json):
    fake_generator.reply = analysis_json
    response = api_client.post(URL, {'symptoms': ['Headache', 'Fever']}, format='json')

    assert response.status_code == 200
    body = response.json()
    assert body['success'] is True
    assert body['analyzedSymptoms'] == ['Headache', 'Fever']
    assert len(body['analysis']['conditions']) == 3
    assert body['timestamp'].endswith('Z')
    assert 'SYMPTOMS: Headache, Fever' in fake_generator.last_prompt


def test_duplicate_symptoms_are_collapsed(api_client, fake_generator, analysis_json):
    fake_generator.reply = analysis_json
    response = api_client.post(URL, {'symptoms': [' Fever ', 'fever', 'Cough']}, format='json')
    assert response.status_code == 200
    assert response.json()['analyzedSymptoms'] == ['Fever', 'Cough']


def test_fenced_reply_is_accepted(api_client, fake_generator, analysis_json):
    fake_generator.reply = f"```json\n{analysis_json}\n```"
    response = api_client.post(URL, {'symptoms': ['Headache']}, format='json')
    assert response.status_code == 200


@pytest.mark.parametrize('payload', [
    {},
    {'symptoms': []},
    {'symptoms': ['  ', '']},
    {'symptoms': 'Headache'},
])
def test_missing_or_empty_symptoms(api_client, fake_generator, payload):
    response = api_client.post(URL, payload, format='json')
    assert response.status_code == 400
    assert response.json() == {'error': 'Please provide at least one symptom'}
    assert fake_generator.calls == []


def test_malformed_json_body(api_client, fake_generator):
    response = api_client.post(URL, data='{not json', content_type='application/json')
    assert response.status_code == 400
    assert response.json() == {'error': 'Please provide at least one symptom'}


def test_unparseable_reply(api_client, fake_generator):
    fake_generator.reply = 'not json'
    response = api_client.post(URL, {'symptoms': ['Headache']}, format='json')
    assert response.status_code == 500
    assert response.json() == {'error': 'Failed to parse AI response'}


def test_reply_with_wrong_shape(api_client, fake_generator):
    fake_generator.reply = json.dumps({'conditions': []})
    response = api_client.post(URL, {'symptoms': ['Headache']}, format='json')
    assert response.status_code == 500
    assert response.json() == {'error': 'Failed to parse AI response'}


def test_model_failure(api_client, fake_generator):
    fake_generator.error = ModelInvocationError('quota exceeded')
    response = api_client.post(URL, {'symptoms': ['Headache']}, format='json')
    assert response.status_code == 500
    assert response.json() == {'error': 'Failed to analyze symptoms. Please try again.'}


def test_missing_api_key(api_client, settings):
    settings.SC_GEMINI_API_KEY = ''
    response = api_client.post(URL, {'symptoms': ['Headache']}, format='json')
    assert response.status_code == 500
    assert response.json() == {'error': 'API key not configured'}


def test_missing_api_key_still_validates_input_first(api_client, settings):
    settings.SC_GEMINI_API_KEY = ''
    response = api_client.post(URL, {'symptoms': []}, format='json')
    assert response.status_code == 400


def test_suggestions(api_client):
    response = api_client.get('/api/symptoms/suggestions/', {'q': 'ache', 'selected': 'Headache'})
    assert response.status_code == 200
    assert response.json() == {'suggestions': ['Body Aches']}


def test_api_root_lists_endpoints(api_client):
    response = api_client.get('/api/')
    assert response.status_code == 200
    assert response.json()['endpoints']['analysis']['analyze'] == '/api/analyze'
