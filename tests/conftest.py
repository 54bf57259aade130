"""
Pytest configuration and fixtures for HandyOps backend tests
"""
import os
import shutil
from datetime import datetime

import pytest

from handyops import create_app, db
from handyops.catalog import CatalogService
from handyops.clients import ClientService
from handyops.errors import BackendUnavailableError
from handyops.jobs import JobService
from handyops.reviews import ReviewService
from handyops.store import MemoryRecordStore, RecordStore

NOW = datetime(2024, 3, 15, 10, 30)


class FixedClock:
    """Clock that only moves when a test says so"""

    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now


class FailingRecordStore(RecordStore):
    """
    Wraps a store and fails writes on demand

    Set ``fail_on`` to the operation names that should raise
    ``BackendUnavailableError``.
    """

    def __init__(self, inner=None):
        self.inner = inner or MemoryRecordStore()
        self.fail_on = set()
        self.calls = []

    def _call(self, operation, *args):
        self.calls.append(operation)
        if operation in self.fail_on:
            raise BackendUnavailableError(f'Store refused {operation}')
        return getattr(self.inner, operation)(*args)

    def list(self, filters=None):
        return self._call('list', filters)

    def get_by_id(self, record_id):
        return self._call('get_by_id', record_id)

    def create(self, record):
        return self._call('create', record)

    def update(self, record_id, partial):
        return self._call('update', record_id, partial)

    def delete(self, record_id):
        return self._call('delete', record_id)


@pytest.fixture(scope='function')
def app():
    """Create application instance for testing"""
    os.environ['FLASK_ENV'] = 'testing'
    app = create_app('testing')

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

    shutil.rmtree(app.config['UPLOAD_FOLDER'], ignore_errors=True)


@pytest.fixture(scope='function')
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def job_store():
    return FailingRecordStore()


@pytest.fixture
def jobs(job_store, clock):
    """JobService over an in-memory store that can be told to fail"""
    return JobService(job_store, clock=clock)


@pytest.fixture
def catalog(clock):
    return CatalogService(MemoryRecordStore(), clock=clock)


@pytest.fixture
def clients(clock):
    return ClientService(MemoryRecordStore(), MemoryRecordStore(), clock=clock)


@pytest.fixture
def reviews(clock):
    return ReviewService(MemoryRecordStore(), clock=clock)


@pytest.fixture
def drywall(catalog):
    """Hourly service: $45/hr for 2 hours"""
    return catalog.create_service({
        'name': 'Drywall Installation',
        'category': 'Drywall',
        'description': 'Hang and finish drywall',
        'pricing_type': 'hourly',
        'hourly_rate': 45,
        'estimated_duration_hours': 2,
    })


@pytest.fixture
def faucet(catalog):
    """Flat-rate service: $150, 1.5 hours"""
    return catalog.create_service({
        'name': 'Faucet Replacement',
        'category': 'Plumbing',
        'description': 'Swap a kitchen or bath faucet',
        'pricing_type': 'flat',
        'flat_rate': 150,
        'estimated_duration_hours': 1.5,
    })


@pytest.fixture
def make_job(jobs):
    """Factory for jobs with sensible defaults"""
    def _make_job(**overrides):
        data = {
            'client_name': 'Jane Smith',
            'phone': '555-0100',
            'address': '12 Elm St',
            'service_type': 'Drywall',
            'scheduled_date': datetime(2024, 3, 15, 9, 0),
            'price': 200,
        }
        data.update(overrides)
        return jobs.create_job(data)
    return _make_job


@pytest.fixture
def api_service(client):
    """Create a catalog service through the API and return it"""
    def _api_service(**overrides):
        data = {
            'name': 'Drywall Installation',
            'category': 'Drywall',
            'description': 'Hang and finish drywall',
            'pricing_type': 'hourly',
            'hourly_rate': 45,
            'estimated_duration_hours': 2,
        }
        data.update(overrides)
        response = client.post('/api/services', json=data)
        assert response.status_code == 201, response.get_json()
        return response.get_json()['service']
    return _api_service


@pytest.fixture
def api_job(client):
    """Create a job through the API and return it"""
    def _api_job(**overrides):
        data = {
            'client_name': 'Jane Smith',
            'service_type': 'Drywall',
            'scheduled_date': '2024-03-15T10:00:00',
            'price': 250,
        }
        data.update(overrides)
        response = client.post('/api/jobs', json=data)
        assert response.status_code == 201, response.get_json()
        return response.get_json()['job']
    return _api_job
