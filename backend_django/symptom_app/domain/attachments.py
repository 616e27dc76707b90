"""Report-file attachments sent as base64 data URIs (image or PDF)."""

from __future__ import annotations

import base64
import binascii
import io
import re
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from .errors import InputValidationError

DEFAULT_MAX_BYTES = 4 * 1024 * 1024

_DATA_URI_RE = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?:;[\w.+-]+=[^;,]*)*;base64,(?P<data>.*)$",
    re.DOTALL,
)


@dataclass(frozen=True)
class Attachment:
    mime_type: str
    data: bytes

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith('image/')


def parse_data_uri(uri: str, max_bytes: int = DEFAULT_MAX_BYTES) -> Attachment:
    """Decode ``data:<mimetype>;base64,<data>`` into an Attachment.

    Only images and PDFs are accepted. Images are opened with Pillow to make
    sure the payload really is a readable image and not just a renamed file.
    """
    m = _DATA_URI_RE.match((uri or '').strip())
    if not m:
        raise InputValidationError("Report file must be a base64 data URI ('data:<mimetype>;base64,<data>').")
    mime = m.group('mime').lower()
    if not (mime.startswith('image/') or mime == 'application/pdf'):
        raise InputValidationError("Only image and PDF report files are allowed.")

    # Reject on encoded length first so a huge payload is never decoded
    payload = re.sub(r"\s+", '', m.group('data'))
    if len(payload) * 3 // 4 > max_bytes + 2:
        raise InputValidationError(f"Please upload a file smaller than {max_bytes // (1024 * 1024)}MB.")
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InputValidationError("Report file is not valid base64 data.") from e
    if not data:
        raise InputValidationError("Report file is empty.")
    if len(data) > max_bytes:
        raise InputValidationError(f"Please upload a file smaller than {max_bytes // (1024 * 1024)}MB.")

    attachment = Attachment(mime_type=mime, data=data)
    if attachment.is_image:
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.verify()
        except Image.DecompressionBombError as e:
            raise InputValidationError("The uploaded image has too many pixels to process.") from e
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise InputValidationError("The uploaded image could not be read.") from e
    return attachment
