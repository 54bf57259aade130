"""SQLAlchemy models package"""
from .service import Service
from .job import Job
from .client import Client, Communication
from .review import Review

__all__ = [
    'Service',
    'Job',
    'Client',
    'Communication',
    'Review',
]
