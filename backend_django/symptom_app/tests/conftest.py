import base64
import io
import json

import pytest
from PIL import Image
from rest_framework.test import APIClient

from symptom_app.config import container
from symptom_app.domain.errors import StoreError
from symptom_app.models import User


class FakeGenerator:
    """Stands in for the hosted model: records prompts and returns a canned reply."""

    def __init__(self):
        self.reply = ''
        self.error = None
        self.calls = []

    def generate(self, prompt, attachments=()):
        self.calls.append({'prompt': prompt, 'attachments': list(attachments)})
        if self.error is not None:
            raise self.error
        return self.reply

    @property
    def last_prompt(self):
        return self.calls[-1]['prompt']


@pytest.fixture
def fake_generator(monkeypatch):
    generator = FakeGenerator()
    monkeypatch.setattr(container, 'get_text_generator', lambda model_name: generator)
    return generator


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username='ana@example.com',
        email='ana@example.com',
        password='Sympt0m-Check!',
        first_name='Ana',
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        username='luis@example.com',
        email='luis@example.com',
        password='Sympt0m-Check!',
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


def make_condition(name, severity='moderate', confidence=70):
    return {
        'name': name,
        'description': f"{name} description",
        'confidence': confidence,
        'severity': severity,
        'matchedSymptoms': ['Headache'],
        'additionalSymptoms': [],
        'recommendedActions': ['Rest'],
    }


def make_analysis(n_conditions=3, urgency_score=5, urgency_level='moderate'):
    return {
        'conditions': [make_condition(f"Condition {i + 1}") for i in range(n_conditions)],
        'urgencyScore': urgency_score,
        'urgencyLevel': urgency_level,
        'generalRecommendations': ['Stay hydrated'],
        'disclaimer': 'This is not a substitute for professional medical advice.',
        'whenToSeekHelp': ['Difficulty breathing'],
    }


@pytest.fixture
def analysis_json():
    return json.dumps(make_analysis())


@pytest.fixture
def diagnosis_output():
    return {
        'potentialDiagnoses': ['Migraine', 'Tension headache'],
        'confidenceLevels': [0.8, 0.4],
        'additionalNotes': 'Keep a headache diary.',
    }


@pytest.fixture
def png_data_uri():
    buf = io.BytesIO()
    Image.new('RGB', (4, 4), color=(200, 30, 30)).save(buf, format='PNG')
    return 'data:image/png;base64,' + base64.b64encode(buf.getvalue()).decode('ascii')


class BrokenRepo:
    """Report store whose backend is unreachable."""

    def create(self, payload):
        raise StoreError('connection refused')

    def list_for_user(self, user_id):
        raise StoreError('connection refused')

    def get_for_user(self, user_id, report_id):
        raise StoreError('connection refused')


@pytest.fixture
def decompression_bomb_uri(monkeypatch, png_data_uri):
    """A PNG whose pixel count is over Pillow's decompression-bomb limit."""
    # 4x4 = 16 pixels, more than twice the lowered limit
    monkeypatch.setattr(Image, 'MAX_IMAGE_PIXELS', 4)
    return png_data_uri
