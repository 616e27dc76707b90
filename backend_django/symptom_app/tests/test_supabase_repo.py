from types import SimpleNamespace

import pytest

from symptom_app.adapters.repositories.supabase_repositories import SupabaseReportRepo
from symptom_app.application.ports.repositories import ReportCreate
from symptom_app.config import container
from symptom_app.domain.errors import ConfigurationError, StoreError

ROW = {
    'id': '5b0a4a53-1f7e-4a43-9d0c-0f2f1fa0e0f1',
    'user_id': 'c6c3d7a2-5d84-4c2f-8d83-1c7a1d2b8f10',
    'symptom_description': 'Dry cough and mild fever for two days.',
    'scan_findings_description': None,
    'report_file_data_uri': None,
    'analysis_result': {'potentialDiagnoses': ['Common cold']},
    'created_at': '2024-05-01T10:15:00+00:00',
}


class FakeQuery:
    def __init__(self, client, table):
        self.client = client
        self.ops = [('table', table)]

    def _add(self, *op):
        self.ops.append(op)
        return self

    def insert(self, row):
        return self._add('insert', row)

    def select(self, columns):
        return self._add('select', columns)

    def eq(self, column, value):
        return self._add('eq', column, value)

    def order(self, column, desc=False):
        return self._add('order', column, desc)

    def limit(self, n):
        return self._add('limit', n)

    def execute(self):
        self.client.executed.append(self.ops)
        if self.client.error is not None:
            raise self.client.error
        return SimpleNamespace(data=self.client.rows)


class FakeClient:
    def __init__(self, rows=None, error=None):
        self.rows = rows if rows is not None else []
        self.error = error
        self.executed = []

    def table(self, name):
        return FakeQuery(self, name)


def test_create_inserts_row_and_returns_record():
    client = FakeClient(rows=[ROW])
    repo = SupabaseReportRepo(table='symptom_reports', client=client)
    record = repo.create(ReportCreate(
        user_id=ROW['user_id'],
        symptom_description=ROW['symptom_description'],
        analysis_result=ROW['analysis_result'],
    ))

    ops = client.executed[0]
    assert ops[0] == ('table', 'symptom_reports')
    assert ops[1][0] == 'insert'
    assert ops[1][1]['user_id'] == ROW['user_id']
    assert record.id == ROW['id']
    assert record.created_at.year == 2024


def test_list_filters_by_user_newest_first():
    client = FakeClient(rows=[ROW])
    records = SupabaseReportRepo(client=client).list_for_user(ROW['user_id'])

    assert client.executed[0][1:] == [
        ('select', '*'),
        ('eq', 'user_id', ROW['user_id']),
        ('order', 'created_at', True),
    ]
    assert [r.id for r in records] == [ROW['id']]


def test_get_for_user_returns_none_when_missing():
    repo = SupabaseReportRepo(client=FakeClient(rows=[]))
    assert repo.get_for_user(ROW['user_id'], ROW['id']) is None


def test_client_errors_become_store_errors():
    error = Exception({'message': 'permission denied for table symptom_reports'})
    repo = SupabaseReportRepo(client=FakeClient(error=error))
    with pytest.raises(StoreError) as exc_info:
        repo.list_for_user(ROW['user_id'])
    assert exc_info.value.message == 'permission denied for table symptom_reports'


def test_empty_insert_response_is_a_store_error():
    repo = SupabaseReportRepo(client=FakeClient(rows=[]))
    with pytest.raises(StoreError):
        repo.create(ReportCreate(user_id='u', symptom_description='x' * 12, analysis_result={}))


def test_missing_credentials(monkeypatch):
    monkeypatch.delenv('SUPABASE_URL', raising=False)
    monkeypatch.delenv('SUPABASE_SERVICE_ROLE_KEY', raising=False)
    monkeypatch.delenv('SUPABASE_ANON_KEY', raising=False)
    with pytest.raises(ConfigurationError):
        SupabaseReportRepo().list_for_user('u')


def test_container_selects_store(settings):
    settings.SC_REPORT_STORE = 'supabase'
    assert isinstance(container.get_report_repo(), SupabaseReportRepo)
    settings.SC_REPORT_STORE = 'orm'
    assert not isinstance(container.get_report_repo(), SupabaseReportRepo)
