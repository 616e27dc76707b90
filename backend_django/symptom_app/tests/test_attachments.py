import base64

import pytest

from symptom_app.domain.attachments import parse_data_uri
from symptom_app.domain.errors import InputValidationError


def _uri(mime, payload):
    return f"data:{mime};base64,{base64.b64encode(payload).decode('ascii')}"


def test_png_is_decoded(png_data_uri):
    attachment = parse_data_uri(png_data_uri)
    assert attachment.mime_type == 'image/png'
    assert attachment.is_image
    assert attachment.data.startswith(b'\x89PNG')


def test_pdf_is_accepted_without_image_check():
    attachment = parse_data_uri(_uri('application/pdf', b'%PDF-1.4\n%fake'))
    assert attachment.mime_type == 'application/pdf'
    assert not attachment.is_image


def test_oversized_file_is_rejected(png_data_uri):
    with pytest.raises(InputValidationError) as exc_info:
        parse_data_uri(_uri('application/pdf', b'x' * 4096), max_bytes=1024)
    assert 'smaller than' in exc_info.value.message


def test_default_limit_message_mentions_4mb():
    big = _uri('application/pdf', b'x' * (4 * 1024 * 1024 + 1))
    with pytest.raises(InputValidationError) as exc_info:
        parse_data_uri(big)
    assert exc_info.value.message == 'Please upload a file smaller than 4MB.'


@pytest.mark.parametrize('uri', [
    'not a data uri',
    'data:image/png,rawbytes',
    _uri('text/plain', b'hello'),
    'data:application/pdf;base64,@@@@',
    _uri('image/png', b'definitely not a png'),
])
def test_invalid_files_are_rejected(uri):
    with pytest.raises(InputValidationError):
        parse_data_uri(uri)


def test_decompression_bomb_is_rejected(decompression_bomb_uri):
    with pytest.raises(InputValidationError) as exc_info:
        parse_data_uri(decompression_bomb_uri)
    assert 'too many pixels' in exc_info.value.message
