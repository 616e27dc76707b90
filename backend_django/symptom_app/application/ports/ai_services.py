from __future__ import annotations

from typing import Protocol, Sequence

from ...domain.attachments import Attachment


class TextGenerator(Protocol):
    def generate(self, prompt: str, attachments: Sequence[Attachment] = ()) -> str:
        """Send the prompt (plus optional files) to the model and return its raw reply text."""
        ...
