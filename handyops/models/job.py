"""Job model"""
from handyops import db
from .base import BaseModel


class Job(BaseModel):
    """
    Job model - a schedulable unit of work

    Notes, photos and the estimate's service manifest are embedded JSON lists
    owned exclusively by the job.
    """
    __tablename__ = 'jobs'

    # Weak references, lookup only. Deleting a service or client keeps the job.
    service_id = db.Column(db.String(36), index=True)
    client_id = db.Column(db.String(36), index=True)

    client_name = db.Column(db.String(255), nullable=False, default='')
    phone = db.Column(db.String(50))
    address = db.Column(db.String(500))

    title = db.Column(db.String(500))
    service_type = db.Column(db.String(255), nullable=False, default='')
    description = db.Column(db.Text)
    priority = db.Column(db.String(20), nullable=False, default='Medium')

    # Scheduling
    scheduled_date = db.Column(db.DateTime, nullable=False, index=True)

    # Money; price stays NULL ("TBD") until agreed
    price = db.Column(db.Float)
    estimated_cost = db.Column(db.Float)
    estimated_duration = db.Column(db.Float)

    status = db.Column(db.String(20), nullable=False, default='Scheduled', index=True)
    completed_at = db.Column(db.DateTime)
    paid_at = db.Column(db.DateTime)

    services = db.Column(db.JSON, nullable=False, default=list)
    notes = db.Column(db.JSON, nullable=False, default=list)
    photos = db.Column(db.JSON, nullable=False, default=list)

    def __repr__(self):
        return f'<Job {self.client_name} - {self.status}>'
