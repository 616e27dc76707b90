from __future__ import annotations

from typing import List, Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError

from ...application.ports.repositories import ReportRepo, ReportCreate, ReportRecord
from ...domain.errors import StoreError
from ...models import SymptomReport, User


def _to_record(report: SymptomReport) -> ReportRecord:
	return ReportRecord(
		id=str(report.id),
		user_id=str(report.user_id),
		symptom_description=report.symptom_description,
		scan_findings_description=report.scan_findings_description,
		report_file_data_uri=report.report_file_data_uri,
		analysis_result=dict(report.analysis_result or {}),
		created_at=report.created_at,
	)


class DjangoReportRepo(ReportRepo):
	"""Reports stored through the ORM (Supabase Postgres in production)."""

	def create(self, payload: ReportCreate) -> ReportRecord:
		try:
			user = User.objects.get(pk=payload.user_id)
		except (User.DoesNotExist, ValidationError) as e:
			raise StoreError(f"User not found: {payload.user_id}") from e
		try:
			report = SymptomReport.objects.create(
				user=user,
				symptom_description=payload.symptom_description,
				scan_findings_description=payload.scan_findings_description or None,
				report_file_data_uri=payload.report_file_data_uri or None,
				analysis_result=dict(payload.analysis_result or {}),
			)
		except DatabaseError as e:
			raise StoreError(str(e)) from e
		return _to_record(report)

	def list_for_user(self, user_id: str) -> List[ReportRecord]:
		try:
			qs = SymptomReport.objects.filter(user_id=user_id).order_by('-created_at')
			return [_to_record(r) for r in qs]
		except (DatabaseError, ValidationError) as e:
			raise StoreError(str(e)) from e

	def get_for_user(self, user_id: str, report_id: str) -> Optional[ReportRecord]:
		try:
			report = SymptomReport.objects.filter(user_id=user_id, pk=report_id).first()
		except (DatabaseError, ValidationError) as e:
			raise StoreError(str(e)) from e
		return _to_record(report) if report else None
