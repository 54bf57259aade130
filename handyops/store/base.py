"""
Record store contract

The core talks to persistence only through this interface. A record is a plain
dict keyed by snake_case field names; field-name translation for stores with a
different schema is the concrete store's job.
"""

COLLECTIONS = ('jobs', 'clients', 'services', 'communications', 'reviews')


class RecordStore:
    """CRUD operations over one collection of records"""

    def list(self, filters=None):
        """
        Return all records matching every ``filters`` item by equality

        Args:
            filters (dict): Field/value pairs; None values are ignored

        Returns:
            list: Matching records
        """
        raise NotImplementedError

    def get_by_id(self, record_id):
        """Return the record, or None when it does not exist"""
        raise NotImplementedError

    def create(self, record):
        """Persist a new record and return it with its id"""
        raise NotImplementedError

    def update(self, record_id, partial):
        """Merge ``partial`` into the record; return the result or None when absent"""
        raise NotImplementedError

    def delete(self, record_id):
        """Remove the record; return True if something was deleted"""
        raise NotImplementedError


def active_filters(filters):
    """Drop filter entries whose value is None"""
    return {key: value for key, value in (filters or {}).items() if value is not None}
