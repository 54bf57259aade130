"""
In-process record store, used for local development and tests
"""
import copy

from handyops.utils.helpers import generate_unique_id
from .base import RecordStore, active_filters


class MemoryRecordStore(RecordStore):
    """Keeps records in a dict keyed by id; every read returns a copy"""

    def __init__(self, records=None):
        self._records = {}
        for record in records or []:
            self.create(record)

    def list(self, filters=None):
        filters = active_filters(filters)
        return [
            copy.deepcopy(record)
            for record in self._records.values()
            if all(record.get(key) == value for key, value in filters.items())
        ]

    def get_by_id(self, record_id):
        record = self._records.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def create(self, record):
        record = copy.deepcopy(record)
        record['id'] = record.get('id') or generate_unique_id()
        self._records[record['id']] = record
        return copy.deepcopy(record)

    def update(self, record_id, partial):
        if record_id not in self._records:
            return None

        merged = dict(self._records[record_id])
        merged.update(copy.deepcopy(partial))
        merged['id'] = record_id
        self._records[record_id] = merged
        return copy.deepcopy(merged)

    def delete(self, record_id):
        return self._records.pop(record_id, None) is not None
