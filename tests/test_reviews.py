"""
Review tests
"""
import pytest

from handyops.errors import NotFoundError, ValidationError
from handyops.reviews import rating_stats


class TestReviews:
    """Test reviews and rating statistics"""

    def test_rating_must_be_one_to_five(self, reviews):
        for rating in (0, 6, 'great', float('inf')):
            with pytest.raises(ValidationError):
                reviews.create_review({'rating': rating})

    def test_stats(self, reviews):
        for rating in (5, 5, 4, 2):
            reviews.create_review({'client_id': 'c1', 'rating': rating})
        stats = reviews.stats()
        assert stats['total_reviews'] == 4
        assert stats['average_rating'] == 4.0
        assert stats['rating_distribution'] == {5: 2, 4: 1, 3: 0, 2: 1, 1: 0}

    def test_empty_stats(self):
        assert rating_stats([]) == {
            'total_reviews': 0,
            'average_rating': 0,
            'rating_distribution': {5: 0, 4: 0, 3: 0, 2: 0, 1: 0},
        }

    def test_average_for_client_rounds_to_one_decimal(self, reviews):
        for rating in (5, 4, 4):
            reviews.create_review({'client_id': 'c1', 'rating': rating})
        reviews.create_review({'client_id': 'c2', 'rating': 1})
        assert reviews.average_rating_for_client('c1') == 4.3

    def test_filter_by_job(self, reviews):
        review = reviews.create_review({'job_id': 'j1', 'rating': 5})
        reviews.create_review({'job_id': 'j2', 'rating': 3})
        assert [r['id'] for r in reviews.list_reviews(job_id='j1')] == [review['id']]

    def test_update_and_delete(self, reviews):
        review = reviews.create_review({'rating': 3, 'comment': 'ok'})
        assert reviews.update_review(review['id'], {'rating': '4'})['rating'] == 4
        reviews.delete_review(review['id'])
        with pytest.raises(NotFoundError):
            reviews.get_review(review['id'])
