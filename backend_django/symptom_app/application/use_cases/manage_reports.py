from __future__ import annotations

from typing import List

from ..ports.repositories import ReportRepo, ReportCreate, ReportRecord


class SaveSymptomReport:
    def __init__(self, repo: ReportRepo) -> None:
        self.repo = repo

    def execute(self, payload: ReportCreate) -> ReportRecord:
        return self.repo.create(payload)


class ListSymptomReports:
    def __init__(self, repo: ReportRepo) -> None:
        self.repo = repo

    def execute(self, user_id: str) -> List[ReportRecord]:
        return self.repo.list_for_user(user_id)
