"""
Base model with common fields and methods
"""
from handyops import db
from handyops.utils.helpers import generate_unique_id, local_now


class BaseModel(db.Model):
    """Abstract base model with common fields"""
    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=generate_unique_id)
    created_at = db.Column(db.DateTime, default=local_now, nullable=False)
    updated_at = db.Column(db.DateTime, default=local_now, onupdate=local_now, nullable=False)

    @classmethod
    def column_names(cls):
        """Names of the mapped columns, used to filter incoming records"""
        return {column.name for column in cls.__table__.columns}

    def to_dict(self, exclude=None):
        """
        Convert model to a record dictionary

        Datetimes are returned as-is; JSON encoding happens at the HTTP layer.

        Args:
            exclude (list): List of fields to exclude

        Returns:
            dict: Model as dictionary
        """
        exclude = exclude or []
        data = {}

        for column in self.__table__.columns:
            if column.name not in exclude:
                value = getattr(self, column.name)
                # JSON columns hand back the live list; give callers a copy
                if isinstance(value, list):
                    value = [dict(item) if isinstance(item, dict) else item for item in value]
                data[column.name] = value

        return data
