"""
Record store reached over HTTP

Talks to a generic REST record API (``GET/POST /<collection>``,
``GET/PATCH/DELETE /<collection>/<id>``). Field names can be renamed per
collection so the rest of the application never sees the remote schema.
"""
import logging

import requests

from handyops.errors import BackendUnavailableError
from handyops.utils.helpers import parse_datetime, serialize_record
from .base import RecordStore, active_filters

logger = logging.getLogger(__name__)

DATETIME_FIELDS = frozenset({
    'created_at', 'updated_at', 'scheduled_date', 'completed_at', 'paid_at',
    'client_since', 'last_contact', 'date',
})


class RemoteRecordStore(RecordStore):
    """Record store for one remote collection"""

    def __init__(self, base_url, collection, session=None, api_key=None, timeout=10,
                 field_map=None):
        self.base_url = base_url.rstrip('/')
        self.collection = collection
        self.session = session or requests.Session()
        self.api_key = api_key
        self.timeout = timeout
        self.field_map = dict(field_map or {})
        self.reverse_map = {remote: local for local, remote in self.field_map.items()}

    def _url(self, record_id=None):
        url = f'{self.base_url}/{self.collection}'
        return f'{url}/{record_id}' if record_id is not None else url

    def _to_remote(self, record):
        return {self.field_map.get(key, key): value for key, value in serialize_record(record).items()}

    def _from_remote(self, data):
        record = {}
        for key, value in data.items():
            local = self.reverse_map.get(key, key)
            if local in DATETIME_FIELDS and isinstance(value, str):
                value = parse_datetime(value)
            record[local] = value
        return record

    def _request(self, method, url, **kwargs):
        headers = {'Accept': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'

        try:
            response = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as err:
            logger.exception('Record store request failed: %s %s', method, url)
            raise BackendUnavailableError('Record store is unavailable') from err

        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            logger.error('Record store returned %s for %s %s', response.status_code, method, url)
            raise BackendUnavailableError(f'Record store returned {response.status_code}')
        if response.status_code == 204 or not response.content:
            return {}

        try:
            payload = response.json()
        except ValueError as err:
            logger.error('Record store sent a non-JSON body for %s %s', method, url)
            raise BackendUnavailableError('Record store sent an invalid response') from err

        if isinstance(payload, dict) and 'data' in payload:
            return payload['data']
        return payload

    def list(self, filters=None):
        params = self._to_remote(active_filters(filters))
        payload = self._request('GET', self._url(), params=params) or []
        return [self._from_remote(item) for item in payload]

    def get_by_id(self, record_id):
        payload = self._request('GET', self._url(record_id))
        return self._from_remote(payload) if payload else None

    def create(self, record):
        payload = self._request('POST', self._url(), json=self._to_remote(record))
        if not payload:
            raise BackendUnavailableError('Record store did not return the created record')
        return self._from_remote(payload)

    def update(self, record_id, partial):
        payload = self._request('PATCH', self._url(record_id), json=self._to_remote(partial))
        if payload is None:
            return None
        return self._from_remote(payload) if payload else self.get_by_id(record_id)

    def delete(self, record_id):
        return self._request('DELETE', self._url(record_id)) is not None
