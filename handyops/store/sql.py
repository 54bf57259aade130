"""
Flask-SQLAlchemy backed record store
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from handyops import db
from handyops.errors import BackendUnavailableError, ValidationError
from .base import RecordStore, active_filters

logger = logging.getLogger(__name__)


class SQLRecordStore(RecordStore):
    """Record store over a single SQLAlchemy model"""

    def __init__(self, model):
        self.model = model
        self.columns = model.column_names()

    def _clean(self, record):
        return {key: value for key, value in record.items() if key in self.columns}

    def _commit(self, action):
        try:
            db.session.commit()
        except SQLAlchemyError as err:
            db.session.rollback()
            logger.exception('Failed to %s %s record', action, self.model.__tablename__)
            raise BackendUnavailableError(f'Failed to {action} record') from err

    def list(self, filters=None):
        filters = active_filters(filters)
        unknown = set(filters) - self.columns
        if unknown:
            raise ValidationError(f'Unknown filter field(s): {", ".join(sorted(unknown))}')

        try:
            query = self.model.query.filter_by(**filters).order_by(self.model.created_at.asc())
            return [row.to_dict() for row in query.all()]
        except SQLAlchemyError as err:
            db.session.rollback()
            logger.exception('Failed to list %s', self.model.__tablename__)
            raise BackendUnavailableError('Failed to load records') from err

    def _get(self, record_id):
        try:
            return db.session.get(self.model, record_id)
        except SQLAlchemyError as err:
            db.session.rollback()
            logger.exception('Failed to load %s %s', self.model.__tablename__, record_id)
            raise BackendUnavailableError('Failed to load record') from err

    def get_by_id(self, record_id):
        row = self._get(record_id)
        return row.to_dict() if row else None

    def create(self, record):
        row = self.model(**self._clean(record))
        db.session.add(row)
        self._commit('create')
        return row.to_dict()

    def update(self, record_id, partial):
        row = self._get(record_id)
        if row is None:
            return None

        for key, value in self._clean(partial).items():
            if key != 'id':
                setattr(row, key, value)
        self._commit('update')
        return row.to_dict()

    def delete(self, record_id):
        row = self._get(record_id)
        if row is None:
            return False

        db.session.delete(row)
        self._commit('delete')
        return True
