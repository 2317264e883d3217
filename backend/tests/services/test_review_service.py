import pytest
from sqlalchemy.orm import Session

from spotbnb.core.exceptions import DuplicateException, NotFoundException
from spotbnb.models.review import Review
from spotbnb.schemas.review import ReviewCreate
from spotbnb.services.review_service import ReviewService
from tests._utils.builders import create_review


class TestCreateReview:
    def test_creates_review(self, db: Session, spot, guest):
        review = ReviewService(db).create_review(guest.id, spot.id, ReviewCreate(review="Lovely", stars=4))

        assert review.id
        assert review.stars == 4

    def test_second_review_by_same_author(self, db: Session, spot, guest):
        create_review(db, spot, guest)

        with pytest.raises(DuplicateException) as exc_info:
            ReviewService(db).create_review(guest.id, spot.id, ReviewCreate(review="Again", stars=3))

        assert exc_info.value.message == "User already has a review for this spot"

    def test_review_stored_concurrently_is_a_duplicate(self, db: Session, spot, guest, monkeypatch):
        service = ReviewService(db)
        real_lookup = service.repository.get_for_user_and_spot
        lookups = []

        def lookup_then_concurrent_review(user_id, spot_id):
            found = real_lookup(user_id, spot_id)
            if not lookups:
                create_review(db, spot, guest, text="Posted from another tab")
            lookups.append(spot_id)
            return found

        monkeypatch.setattr(service.repository, "get_for_user_and_spot", lookup_then_concurrent_review)

        with pytest.raises(DuplicateException) as exc_info:
            service.create_review(guest.id, spot.id, ReviewCreate(review="Lovely", stars=4))

        assert exc_info.value.status_code == 409
        db.expire_all()
        [stored] = db.query(Review).filter(Review.spot_id == spot.id).all()
        assert stored.review == "Posted from another tab"

    def test_unknown_spot(self, db: Session, guest):
        with pytest.raises(NotFoundException):
            ReviewService(db).create_review(guest.id, "missing-spot", ReviewCreate(review="Lovely", stars=4))
