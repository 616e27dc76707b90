from __future__ import annotations

from django.conf import settings

from ..adapters.ai.gemini_generator import GeminiTextGenerator
from ..adapters.repositories.orm_repositories import DjangoReportRepo
from ..adapters.repositories.supabase_repositories import SupabaseReportRepo
from ..application.ports.ai_services import TextGenerator
from ..application.ports.repositories import ReportRepo
from ..application.use_cases.analyze_symptom_description import (
    AnalyzeSymptomDescription,
    ImproveSymptomDescription,
)
from ..application.use_cases.analyze_symptom_list import AnalyzeSymptomList
from ..application.use_cases.manage_reports import ListSymptomReports, SaveSymptomReport


def get_text_generator(model_name: str) -> TextGenerator:
    # Raises ConfigurationError when the key is missing, before any network call
    return GeminiTextGenerator(model_name=model_name, api_key=settings.SC_GEMINI_API_KEY)


def get_report_repo() -> ReportRepo:
    store_kind = str(getattr(settings, 'SC_REPORT_STORE', 'orm')).strip().lower()
    if store_kind in ('supabase', 'supabase_table'):
        return SupabaseReportRepo(table=settings.SC_REPORTS_TABLE)
    return DjangoReportRepo()


def get_symptom_list_use_case() -> AnalyzeSymptomList:
    return AnalyzeSymptomList(generator=get_text_generator(settings.SC_SYMPTOM_MODEL))


def get_description_use_case() -> AnalyzeSymptomDescription:
    return AnalyzeSymptomDescription(
        generator=get_text_generator(settings.SC_DIAGNOSIS_MODEL),
        max_file_bytes=settings.SC_REPORT_FILE_MAX_BYTES,
    )


def get_improve_description_use_case() -> ImproveSymptomDescription:
    return ImproveSymptomDescription(generator=get_text_generator(settings.SC_DIAGNOSIS_MODEL))


def get_save_report_use_case() -> SaveSymptomReport:
    return SaveSymptomReport(repo=get_report_repo())


def get_list_reports_use_case() -> ListSymptomReports:
    return ListSymptomReports(repo=get_report_repo())
