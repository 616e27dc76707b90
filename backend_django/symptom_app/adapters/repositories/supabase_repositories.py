from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from django.utils.dateparse import parse_datetime

from ...application.ports.repositories import ReportRepo, ReportCreate, ReportRecord
from ...domain.errors import StoreError
from ..supabase_common import create_supabase_client, error_message


def _row_to_record(row: Dict[str, Any]) -> ReportRecord:
	created = row.get('created_at')
	if isinstance(created, str):
		created_at = parse_datetime(created)
	else:
		created_at = created
	if created_at is None:
		created_at = datetime.now(timezone.utc)
	return ReportRecord(
		id=str(row.get('id')),
		user_id=str(row.get('user_id')),
		symptom_description=row.get('symptom_description') or '',
		scan_findings_description=row.get('scan_findings_description'),
		report_file_data_uri=row.get('report_file_data_uri'),
		analysis_result=dict(row.get('analysis_result') or {}),
		created_at=created_at,
	)


class SupabaseReportRepo(ReportRepo):
	"""Reports stored in the hosted `symptom_reports` table via supabase-py.

	Ownership is enforced store-side by row-level security
	(see backend_django/supabase/symptom_reports.sql).
	"""

	def __init__(self, table: str = 'symptom_reports', client=None):
		self.table = table
		self.client = client  # lazy init

	def _client(self):
		if self.client is None:
			self.client = create_supabase_client()
		return self.client

	def _execute(self, query):
		try:
			return query.execute()
		except Exception as e:
			raise StoreError(error_message(e)) from e

	def create(self, payload: ReportCreate) -> ReportRecord:
		row = {
			'user_id': str(payload.user_id),
			'symptom_description': payload.symptom_description,
			'scan_findings_description': payload.scan_findings_description or None,
			'report_file_data_uri': payload.report_file_data_uri or None,
			'analysis_result': dict(payload.analysis_result or {}),
		}
		res = self._execute(self._client().table(self.table).insert(row))
		data = getattr(res, 'data', None) or []
		if not data:
			raise StoreError("Insert returned no row")
		return _row_to_record(data[0])

	def list_for_user(self, user_id: str) -> List[ReportRecord]:
		query = (
			self._client().table(self.table)
			.select('*')
			.eq('user_id', str(user_id))
			.order('created_at', desc=True)
		)
		res = self._execute(query)
		return [_row_to_record(row) for row in (getattr(res, 'data', None) or [])]

	def get_for_user(self, user_id: str, report_id: str) -> Optional[ReportRecord]:
		query = (
			self._client().table(self.table)
			.select('*')
			.eq('user_id', str(user_id))
			.eq('id', str(report_id))
			.limit(1)
		)
		res = self._execute(query)
		data = getattr(res, 'data', None) or []
		return _row_to_record(data[0]) if data else None
