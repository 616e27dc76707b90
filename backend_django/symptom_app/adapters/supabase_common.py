from __future__ import annotations

import os

from ..domain.errors import ConfigurationError


def create_supabase_client():
	"""Create and return a Supabase client using env vars.

	Requires SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY or SUPABASE_ANON_KEY.
	The service-role key bypasses row-level security, so callers must always
	scope queries by user_id themselves.
	"""
	from supabase import create_client

	url = os.getenv('SUPABASE_URL')
	key = os.getenv('SUPABASE_SERVICE_ROLE_KEY') or os.getenv('SUPABASE_ANON_KEY')
	if not url or not key:
		raise ConfigurationError("Missing SUPABASE_URL and/or SUPABASE_SERVICE_ROLE_KEY/ANON_KEY env vars")
	return create_client(url, key)


def error_message(exc: Exception) -> str:
	"""Best-effort human message from a postgrest/httpx error."""
	msg = getattr(exc, 'message', None)
	if isinstance(msg, str) and msg:
		return msg
	if exc.args and isinstance(exc.args[0], dict):
		inner = exc.args[0].get('message')
		if inner:
			return str(inner)
	return str(exc) or exc.__class__.__name__
