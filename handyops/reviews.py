"""
Client reviews and rating statistics
"""
import logging

from handyops.errors import NotFoundError, ValidationError
from handyops.utils.helpers import local_now, round_half_up, safe_int

logger = logging.getLogger(__name__)

RATINGS = (5, 4, 3, 2, 1)

_EDITABLE_FIELDS = ('client_id', 'job_id', 'job_description', 'rating', 'comment')


def _check_rating(value):
    rating = safe_int(value, default=None)
    if rating is None or rating not in RATINGS:
        raise ValidationError('Rating must be a whole number from 1 to 5')
    return rating


def rating_stats(reviews):
    """
    Count, average and distribution of ratings

    The average is rounded to one decimal; an empty list gives zeros.
    """
    distribution = {rating: 0 for rating in RATINGS}
    for review in reviews:
        if review.get('rating') in distribution:
            distribution[review['rating']] += 1

    total = len(reviews)
    average = sum(review.get('rating') or 0 for review in reviews) / total if total else 0
    return {
        'total_reviews': total,
        'average_rating': round_half_up(average, 1) if total else 0,
        'rating_distribution': distribution,
    }


class ReviewService:

    def __init__(self, store, clock=local_now):
        self.store = store
        self.clock = clock

    def list_reviews(self, client_id=None, job_id=None):
        """Reviews, newest first"""
        reviews = self.store.list({'client_id': client_id, 'job_id': job_id})
        return sorted(reviews, key=lambda review: review['created_at'], reverse=True)

    def get_review(self, review_id):
        review = self.store.get_by_id(review_id)
        if review is None:
            raise NotFoundError('Review not found')
        return review

    def create_review(self, data):
        record = {key: value for key, value in data.items() if key in _EDITABLE_FIELDS}
        record['rating'] = _check_rating(data.get('rating', 5))
        now = self.clock()
        record.update(created_at=now, updated_at=now)

        review = self.store.create(record)
        logger.info('Recorded %d-star review %s', review['rating'], review['id'])
        return review

    def update_review(self, review_id, data):
        changes = {key: value for key, value in data.items() if key in _EDITABLE_FIELDS}
        if 'rating' in changes:
            changes['rating'] = _check_rating(changes['rating'])
        changes['updated_at'] = self.clock()

        review = self.store.update(review_id, changes)
        if review is None:
            raise NotFoundError('Review not found')
        return review

    def delete_review(self, review_id):
        if not self.store.delete(review_id):
            raise NotFoundError('Review not found')

    def stats(self):
        return rating_stats(self.store.list())

    def average_rating_for_client(self, client_id):
        return rating_stats(self.list_reviews(client_id=client_id))['average_rating']
