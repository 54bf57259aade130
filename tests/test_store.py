"""
Record store tests
Tests the memory, SQL and remote implementations of the store contract
"""
from datetime import datetime

import pytest
import requests
from flask import Flask

from handyops.errors import BackendUnavailableError, ValidationError
from handyops.store import MemoryRecordStore, RemoteRecordStore, get_stores, init_stores


class TestMemoryRecordStore:
    """Test the in-process store"""

    def test_crud(self):
        store = MemoryRecordStore()
        record = store.create({'name': 'Jane', 'status': 'Active'})
        assert record['id']
        assert store.get_by_id(record['id']) == record
        assert store.update(record['id'], {'status': 'Lead'})['status'] == 'Lead'
        assert store.delete(record['id']) is True
        assert store.delete(record['id']) is False
        assert store.update(record['id'], {'status': 'Active'}) is None

    def test_filters_ignore_none(self):
        store = MemoryRecordStore([{'status': 'Active'}, {'status': 'Lead'}])
        assert len(store.list({'status': None})) == 2
        assert [r['status'] for r in store.list({'status': 'Lead'})] == ['Lead']

    def test_reads_are_copies(self):
        store = MemoryRecordStore()
        record = store.create({'notes': []})
        record['notes'].append({'id': 'x'})
        assert store.get_by_id(record['id'])['notes'] == []


class TestSQLRecordStore:
    """Test the Flask-SQLAlchemy store"""

    def test_job_round_trip(self, app):
        store = get_stores().jobs
        job = store.create({
            'client_name': 'Jane',
            'service_type': 'Drywall',
            'scheduled_date': datetime(2024, 3, 15, 9),
            'notes': [{'id': 'n1', 'text': 'hi', 'created_at': '2024-03-15T09:00:00'}],
            'not_a_column': 'ignored',
        })
        loaded = store.get_by_id(job['id'])
        assert loaded['scheduled_date'] == datetime(2024, 3, 15, 9)
        assert loaded['notes'][0]['text'] == 'hi'
        assert 'not_a_column' not in loaded

        updated = store.update(job['id'], {'notes': [], 'price': 99.5})
        assert updated['notes'] == [] and updated['price'] == 99.5
        assert [j['id'] for j in store.list({'status': 'Scheduled'})] == [job['id']]

    def test_unknown_filter_field(self, app):
        with pytest.raises(ValidationError):
            get_stores().jobs.list({'colour': 'red'})

    def test_missing_record(self, app):
        store = get_stores().services
        assert store.get_by_id('missing') is None
        assert store.update('missing', {'name': 'x'}) is None
        assert store.delete('missing') is False


class FakeResponse:

    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload
        self.content = b'' if payload is None else b'json'

    def json(self):
        return self._payload


class FakeSession:
    """Records requests and replays canned responses"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class TestRemoteRecordStore:
    """Test the HTTP store and its field-name mapping"""

    def _store(self, *responses):
        session = FakeSession(*responses)
        store = RemoteRecordStore(
            'https://records.example.com/api/', 'jobs', session=session, api_key='secret',
            field_map={'price': 'price_c', 'scheduled_date': 'scheduled_date_c'},
        )
        return store, session

    def test_create_translates_fields_both_ways(self):
        store, session = self._store(FakeResponse(201, {'data': {
            'id': '7', 'price_c': 120, 'scheduled_date_c': '2024-03-15T09:00:00',
        }}))
        job = store.create({'price': 120, 'scheduled_date': datetime(2024, 3, 15, 9)})

        method, url, kwargs = session.requests[0]
        assert (method, url) == ('POST', 'https://records.example.com/api/jobs')
        assert kwargs['json'] == {'price_c': 120, 'scheduled_date_c': '2024-03-15T09:00:00'}
        assert kwargs['headers']['Authorization'] == 'Bearer secret'
        assert job == {'id': '7', 'price': 120, 'scheduled_date': datetime(2024, 3, 15, 9)}

    def test_update_uses_patch_and_missing_is_none(self):
        store, session = self._store(FakeResponse(404))
        assert store.update('7', {'price': 10}) is None
        assert session.requests[0][0] == 'PATCH'

    def test_list_sends_mapped_filters(self):
        store, session = self._store(FakeResponse(200, [{'id': '1', 'price_c': 5}]))
        assert store.list({'price': 5, 'status': None}) == [{'id': '1', 'price': 5}]
        assert session.requests[0][2]['params'] == {'price_c': 5}

    def test_network_failure_is_backend_unavailable(self):
        store, _ = self._store(requests.ConnectionError('down'))
        with pytest.raises(BackendUnavailableError):
            store.get_by_id('7')

    def test_server_error_is_backend_unavailable(self):
        store, _ = self._store(FakeResponse(500, {'error': 'boom'}))
        with pytest.raises(BackendUnavailableError):
            store.delete('7')


class TestInitStores:
    """Test backend selection from config"""

    def test_memory_backend(self):
        app = Flask(__name__)
        app.config['RECORD_STORE'] = 'memory'
        stores = init_stores(app)
        assert isinstance(stores.jobs, MemoryRecordStore)
        assert stores.jobs is not stores.clients

    def test_remote_backend_needs_url(self):
        app = Flask(__name__)
        app.config.update(RECORD_STORE='remote', REMOTE_STORE_URL='')
        with pytest.raises(RuntimeError):
            init_stores(app)

    def test_remote_backend_applies_field_maps(self):
        app = Flask(__name__)
        app.config.update(
            RECORD_STORE='remote',
            REMOTE_STORE_URL='https://records.example.com',
            REMOTE_FIELD_MAPS={'jobs': {'price': 'price_c'}},
        )
        stores = init_stores(app)
        assert isinstance(stores.services, RemoteRecordStore)
        assert stores.jobs.field_map == {'price': 'price_c'}
        assert stores.services.field_map == {}
