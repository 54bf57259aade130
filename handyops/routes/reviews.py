"""
Review API routes
"""
from flask import Blueprint, request

from .common import json_body, respond, review_service

reviews_bp = Blueprint('reviews', __name__)


@reviews_bp.route('', methods=['GET'])
def list_reviews():
    """
    List reviews, newest first
    GET /api/reviews?client_id=...&job_id=...
    """
    reviews = review_service().list_reviews(
        client_id=request.args.get('client_id') or None,
        job_id=request.args.get('job_id') or None,
    )
    return respond({'reviews': reviews, 'total': len(reviews)})


@reviews_bp.route('/stats', methods=['GET'])
def review_stats():
    return respond({'stats': review_service().stats()})


@reviews_bp.route('/client/<client_id>', methods=['GET'])
def reviews_for_client(client_id):
    service = review_service()
    reviews = service.list_reviews(client_id=client_id)
    return respond({
        'reviews': reviews,
        'average_rating': service.average_rating_for_client(client_id),
    })


@reviews_bp.route('/job/<job_id>', methods=['GET'])
def reviews_for_job(job_id):
    return respond({'reviews': review_service().list_reviews(job_id=job_id)})


@reviews_bp.route('/<review_id>', methods=['GET'])
def get_review(review_id):
    return respond({'review': review_service().get_review(review_id)})


@reviews_bp.route('', methods=['POST'])
def create_review():
    """
    Record a review
    POST /api/reviews
    Body: {"client_id": "...", "job_id": "...", "rating": 5, "comment": "..."}
    """
    review = review_service().create_review(json_body())
    return respond({'review': review}, 201)


@reviews_bp.route('/<review_id>', methods=['PUT', 'PATCH'])
def update_review(review_id):
    review = review_service().update_review(review_id, json_body())
    return respond({'review': review})


@reviews_bp.route('/<review_id>', methods=['DELETE'])
def delete_review(review_id):
    review_service().delete_review(review_id)
    return respond({'deleted': True})
