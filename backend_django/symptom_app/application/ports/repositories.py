from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol


@dataclass
class ReportCreate:
    user_id: str
    symptom_description: str
    analysis_result: Dict[str, Any]
    scan_findings_description: Optional[str] = None
    report_file_data_uri: Optional[str] = None


@dataclass
class ReportRecord:
    id: str
    user_id: str
    symptom_description: str
    analysis_result: Dict[str, Any]
    created_at: datetime
    scan_findings_description: Optional[str] = None
    report_file_data_uri: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'symptom_description': self.symptom_description,
            'scan_findings_description': self.scan_findings_description,
            'report_file_data_uri': self.report_file_data_uri,
            'analysis_result': self.analysis_result,
            'created_at': self.created_at.isoformat(),
        }


class ReportRepo(Protocol):
    def create(self, payload: ReportCreate) -> ReportRecord:
        ...

    def list_for_user(self, user_id: str) -> List[ReportRecord]:
        """Newest first."""
        ...

    def get_for_user(self, user_id: str, report_id: str) -> Optional[ReportRecord]:
        ...
