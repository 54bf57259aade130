"""Review model"""
from handyops import db
from .base import BaseModel


class Review(BaseModel):
    """
    Review model - client feedback on a job
    """
    __tablename__ = 'reviews'

    client_id = db.Column(db.String(36), index=True)
    job_id = db.Column(db.String(36), index=True)
    job_description = db.Column(db.String(500))
    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text)

    def __repr__(self):
        return f'<Review {self.rating} - job={self.job_id}>'
