"""Server-side callables for the report-history (free-text) flow.

These are invoked directly (no HTTP envelope). The analysis callables raise
domain errors; the persistence callables never raise and return a
``{data|reports, error}`` dict instead. The authenticated identity is always
passed in explicitly as ``user``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from django.conf import settings

from .application.ports.repositories import ReportCreate
from .application.use_cases.analyze_symptom_description import (
    AnalyzeDescriptionInput,
    validate_description,
    validate_scan_findings,
)
from .config import container
from .domain.attachments import parse_data_uri
from .domain.errors import (
    ConfigurationError,
    InputValidationError,
    ResponseSchemaError,
    StoreError,
    summarize_errors,
)
from .domain.normalizer import validate_payload
from .domain.schemas import DiagnosisOutputSerializer

logger = logging.getLogger(__name__)

NOT_AUTHENTICATED = "User not authenticated"
ERROR_PREFIX = "Error:"
FAILED_ANALYSIS_NOT_SAVED = "A failed analysis cannot be saved."


def failed_analysis_output(message: str) -> Dict[str, Any]:
    return {'potentialDiagnoses': [], 'additionalNotes': f"{ERROR_PREFIX} {message}"}


def is_failed_analysis_output(output: Optional[Dict[str, Any]]) -> bool:
    notes = (output or {}).get('additionalNotes') or ''
    return isinstance(notes, str) and notes.lower().startswith(ERROR_PREFIX.lower())


def _is_authenticated(user) -> bool:
    return user is not None and bool(getattr(user, 'is_authenticated', False))


def analyze_symptoms(
    symptom_description: str,
    scan_findings_description: Optional[str] = None,
    report_file_data_uri: Optional[str] = None,
) -> Dict[str, Any]:
    # Input errors are reported before the model credential is even looked at
    validate_description(symptom_description)
    validate_scan_findings(scan_findings_description)
    if report_file_data_uri:
        parse_data_uri(report_file_data_uri, settings.SC_REPORT_FILE_MAX_BYTES)

    use_case = container.get_description_use_case()
    return use_case.execute(AnalyzeDescriptionInput(
        symptom_description=symptom_description,
        scan_findings_description=scan_findings_description,
        report_file_data_uri=report_file_data_uri,
    ))


def improve_symptom_description(symptom_description: str) -> Dict[str, str]:
    if not (symptom_description or '').strip():
        raise InputValidationError("Please enter your symptoms first.")
    use_case = container.get_improve_description_use_case()
    return {'improvedDescription': use_case.execute(symptom_description)}


def validate_report_input(
    symptom_description: str,
    analysis_result: Any,
    scan_findings_description: Optional[str] = None,
    report_file_data_uri: Optional[str] = None,
) -> ReportCreate:
    """Check a report before it is stored; raises InputValidationError.

    Failed analyses (``Error:`` notes, or an empty ``potentialDiagnoses``)
    are rejected here, so they never reach the history.
    """
    description = validate_description(symptom_description)
    findings = validate_scan_findings(scan_findings_description)
    if report_file_data_uri:
        parse_data_uri(report_file_data_uri, settings.SC_REPORT_FILE_MAX_BYTES)
    if isinstance(analysis_result, dict) and is_failed_analysis_output(analysis_result):
        raise InputValidationError(FAILED_ANALYSIS_NOT_SAVED)
    try:
        result = validate_payload(analysis_result, DiagnosisOutputSerializer)
    except ResponseSchemaError as e:
        raise InputValidationError(
            f"Invalid analysis result: {summarize_errors(e.details)}", detail=e.details
        ) from e
    return ReportCreate(
        user_id='',
        symptom_description=description,
        scan_findings_description=findings,
        report_file_data_uri=report_file_data_uri or None,
        analysis_result=result,
    )


def save_symptom_report_action(
    user,
    symptom_description: str,
    analysis_result: Dict[str, Any],
    scan_findings_description: Optional[str] = None,
    report_file_data_uri: Optional[str] = None,
) -> Dict[str, Any]:
    if not _is_authenticated(user):
        return {'data': None, 'error': NOT_AUTHENTICATED}

    try:
        report = validate_report_input(
            symptom_description, analysis_result, scan_findings_description, report_file_data_uri,
        )
    except InputValidationError as e:
        return {'data': None, 'error': e.message}

    user_id = str(user.pk)
    report.user_id = user_id
    try:
        record = container.get_save_report_use_case().execute(report)
    except (StoreError, ConfigurationError) as e:
        logger.error("Error saving report for user %s: %s", user_id, e)
        return {'data': None, 'error': str(e)}

    return {'data': record.to_dict(), 'error': None}


def get_symptom_reports_action(user) -> Dict[str, Any]:
    if not _is_authenticated(user):
        return {'reports': [], 'error': NOT_AUTHENTICATED}

    user_id = str(user.pk)
    try:
        records = container.get_list_reports_use_case().execute(user_id)
    except (StoreError, ConfigurationError) as e:
        logger.error("Error fetching reports for user %s: %s", user_id, e)
        return {'reports': [], 'error': str(e)}

    reports = [r.to_dict() for r in records]
    return {'reports': reports, 'error': None}


def get_symptom_report_action(user, report_id: str) -> Dict[str, Any]:
    if not _is_authenticated(user):
        return {'data': None, 'error': NOT_AUTHENTICATED}
    try:
        record = container.get_report_repo().get_for_user(str(user.pk), str(report_id))
    except (StoreError, ConfigurationError) as e:
        logger.error("Error fetching report %s: %s", report_id, e)
        return {'data': None, 'error': str(e)}
    return {'data': record.to_dict() if record else None, 'error': None}
