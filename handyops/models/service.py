"""Service model"""
from handyops import db
from .base import BaseModel


class Service(BaseModel):
    """
    Service model - catalog entry for a type of handyman work
    """
    __tablename__ = 'services'

    name = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False)

    # Pricing
    pricing_type = db.Column(db.String(20), nullable=False)  # hourly, flat
    hourly_rate = db.Column(db.Float)
    flat_rate = db.Column(db.Float)

    estimated_duration_hours = db.Column(db.Float, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    __table_args__ = (
        db.Index('idx_services_category', 'category', 'is_active'),
    )

    def __repr__(self):
        return f'<Service {self.name}>'
