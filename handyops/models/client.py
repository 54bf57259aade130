"""Client and communication models"""
from handyops import db
from .base import BaseModel


class Client(BaseModel):
    """
    Client model - customers of the business

    total_jobs and total_spent are counters maintained by explicit updates;
    they are never recomputed from job history.
    """
    __tablename__ = 'clients'

    name = db.Column(db.String(255), nullable=False)
    company = db.Column(db.String(255))
    email = db.Column(db.String(255), index=True)
    phone = db.Column(db.String(50))
    address = db.Column(db.String(500))
    preferred_contact = db.Column(db.String(20), default='email')
    notes = db.Column(db.Text)

    status = db.Column(db.String(20), nullable=False, default='Active')  # Active, Inactive, Lead

    total_jobs = db.Column(db.Integer, nullable=False, default=0)
    total_spent = db.Column(db.Float, nullable=False, default=0.0)

    client_since = db.Column(db.DateTime)
    last_contact = db.Column(db.DateTime)

    def __repr__(self):
        return f'<Client {self.name}>'


class Communication(BaseModel):
    """
    Communication model - a logged contact with a client
    """
    __tablename__ = 'communications'

    client_id = db.Column(db.String(36), nullable=False, index=True)
    type = db.Column(db.String(20), nullable=False, default='email')  # email, phone, meeting, text, note
    subject = db.Column(db.String(255))
    message = db.Column(db.Text)
    direction = db.Column(db.String(20), nullable=False, default='outbound')
    contact_person = db.Column(db.String(255))
    date = db.Column(db.DateTime, nullable=False)

    def __repr__(self):
        return f'<Communication {self.type} - client={self.client_id}>'
