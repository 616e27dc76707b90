from types import SimpleNamespace

import pytest

from symptom_app.adapters.ai import gemini_generator
from symptom_app.adapters.ai.gemini_generator import GeminiTextGenerator, message_text
from symptom_app.domain.attachments import Attachment
from symptom_app.domain.errors import ConfigurationError, ModelInvocationError


class FakeChatModel:
    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.messages = None
        self.reply = SimpleNamespace(content='{"ok": true}')
        self.error = None
        FakeChatModel.instances.append(self)

    def invoke(self, messages):
        self.messages = messages
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_chat(monkeypatch):
    FakeChatModel.instances = []
    monkeypatch.setattr(gemini_generator, 'ChatGoogleGenerativeAI', FakeChatModel)
    return FakeChatModel


def test_missing_key_fails_before_building_a_client(fake_chat):
    with pytest.raises(ConfigurationError):
        GeminiTextGenerator('gemini-2.5-flash', '')
    assert fake_chat.instances == []


def test_text_prompt(fake_chat):
    generator = GeminiTextGenerator('gemini-2.5-flash', 'key-123')
    assert generator.generate('Analyze: Headache') == '{"ok": true}'

    model = fake_chat.instances[0]
    assert model.kwargs['model'] == 'gemini-2.5-flash'
    assert model.kwargs['google_api_key'] == 'key-123'
    assert model.messages[0].content == 'Analyze: Headache'


def test_attachments_are_sent_as_media_parts(fake_chat):
    generator = GeminiTextGenerator('gemini-2.5-flash', 'key-123')
    generator.generate('Describe', [Attachment(mime_type='application/pdf', data=b'%PDF-1.4')])

    content = fake_chat.instances[0].messages[0].content
    assert content[0] == {'type': 'text', 'text': 'Describe'}
    assert content[1] == {'type': 'media', 'mime_type': 'application/pdf', 'data': b'%PDF-1.4'}


def test_sdk_errors_become_model_invocation_errors(fake_chat):
    generator = GeminiTextGenerator('gemini-2.5-flash', 'key-123')
    fake_chat.instances[0].error = RuntimeError('429 quota exceeded')
    with pytest.raises(ModelInvocationError):
        generator.generate('Analyze')


def test_message_text_flattens_parts():
    assert message_text('plain') == 'plain'
    assert message_text([{'type': 'text', 'text': '{"a":'}, ' 1}', {'type': 'image_url'}]) == '{"a": 1}'
    assert message_text(None) == ''
