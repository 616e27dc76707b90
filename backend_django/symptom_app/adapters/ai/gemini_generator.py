from __future__ import annotations

import logging
from typing import Any, Sequence

from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from ...application.ports.ai_services import TextGenerator
from ...domain.attachments import Attachment
from ...domain.errors import ConfigurationError, ModelInvocationError

logger = logging.getLogger(__name__)


def message_text(content: Any) -> str:
	"""Flatten a chat message content (str or list of parts) into plain text."""
	if isinstance(content, str):
		return content
	parts = []
	for part in content or []:
		if isinstance(part, str):
			parts.append(part)
		elif isinstance(part, dict) and part.get('type', 'text') == 'text':
			parts.append(str(part.get('text', '')))
	return ''.join(parts)


class GeminiTextGenerator(TextGenerator):
	"""Hosted Gemini model through langchain-google-genai.

	No decoding parameters are set (model defaults) and the call is made once:
	failures go straight back to the user, who retries manually.
	"""

	def __init__(self, model_name: str, api_key: str):
		if not api_key:
			raise ConfigurationError("API key not configured")
		self.model_name = model_name
		self.model = ChatGoogleGenerativeAI(
			model=model_name,
			google_api_key=api_key,
			timeout=None,
			max_retries=1,
		)

	def generate(self, prompt: str, attachments: Sequence[Attachment] = ()) -> str:
		if attachments:
			content = [{'type': 'text', 'text': prompt}]
			for att in attachments:
				content.append({'type': 'media', 'mime_type': att.mime_type, 'data': att.data})
			messages = [HumanMessage(content=content)]
		else:
			messages = [HumanMessage(content=prompt)]
		try:
			response = self.model.invoke(messages)
		except Exception as e:
			logger.error("Gemini call failed (model=%s): %s", self.model_name, e)
			raise ModelInvocationError(str(e)) from e
		return message_text(getattr(response, 'content', response))
