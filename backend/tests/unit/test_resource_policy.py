"""Ownership rules for spots, images, reviews and bookings."""

from datetime import date, timedelta

import pytest

from spotbnb.core.exceptions import ForbiddenException, NotFoundException
from spotbnb.core.resource_policy import Decision, PolicyAction, authorize, enforce
from spotbnb.models.booking import Booking
from spotbnb.models.review import Review, ReviewImage
from spotbnb.models.spot import Spot, SpotImage

OWNER = "01HOWNER000000000000000000"
GUEST = "01HGUEST000000000000000000"
STRANGER = "01HSTRANGER000000000000000"
TODAY = date(2030, 6, 15)


@pytest.fixture
def spot() -> Spot:
    return Spot(id="spot-1", owner_id=OWNER)


@pytest.fixture
def review(spot: Spot) -> Review:
    return Review(id="review-1", spot=spot, spot_id=spot.id, user_id=GUEST, review="Nice", stars=4)


def _booking(spot: Spot, start_offset: int, end_offset: int) -> Booking:
    return Booking(
        id="booking-1",
        spot=spot,
        spot_id=spot.id,
        user_id=GUEST,
        start_date=TODAY + timedelta(days=start_offset),
        end_date=TODAY + timedelta(days=end_offset),
    )


class TestSpotPolicy:
    def test_anyone_may_read(self, spot):
        assert authorize(PolicyAction.READ, None, spot).allowed

    @pytest.mark.parametrize("action", [PolicyAction.UPDATE, PolicyAction.DELETE, PolicyAction.ADD_IMAGE])
    def test_only_owner_may_mutate(self, spot, action):
        assert authorize(action, OWNER, spot).allowed
        assert authorize(action, STRANGER, spot).decision is Decision.FORBIDDEN
        assert authorize(action, None, spot).decision is Decision.FORBIDDEN

    def test_owner_cannot_book_own_spot(self, spot):
        decision = authorize(PolicyAction.CREATE_BOOKING, OWNER, spot)

        assert decision.decision is Decision.FORBIDDEN
        assert decision.reason == "Forbidden: Cannot book your own spot"
        assert authorize(PolicyAction.CREATE_BOOKING, GUEST, spot).allowed

    def test_booking_details_visible_to_owner_only(self, spot):
        assert authorize(PolicyAction.VIEW_BOOKING_DETAILS, OWNER, spot).allowed
        assert not authorize(PolicyAction.VIEW_BOOKING_DETAILS, GUEST, spot).allowed

    def test_missing_resource_is_not_found(self):
        assert authorize(PolicyAction.UPDATE, OWNER, None).decision is Decision.NOT_FOUND


class TestImagePolicy:
    def test_spot_image_follows_spot_owner(self, spot):
        image = SpotImage(id="img-1", spot=spot, url="https://img.example.com/a.png", preview=True)

        assert authorize(PolicyAction.DELETE, OWNER, image).allowed
        assert not authorize(PolicyAction.DELETE, STRANGER, image).allowed

    def test_explicit_parent_spot_is_used(self, spot):
        image = SpotImage(id="img-1", spot_id=spot.id, url="https://img.example.com/a.png")

        assert authorize(PolicyAction.DELETE, OWNER, image, spot=spot).allowed

    def test_review_image_follows_review_author(self, review):
        image = ReviewImage(id="rimg-1", review=review, url="https://img.example.com/r.png")

        assert authorize(PolicyAction.DELETE, GUEST, image).allowed
        assert not authorize(PolicyAction.DELETE, OWNER, image).allowed


class TestReviewPolicy:
    def test_only_author_may_change(self, review):
        assert authorize(PolicyAction.UPDATE, GUEST, review).allowed
        assert authorize(PolicyAction.ADD_IMAGE, GUEST, review).allowed
        assert not authorize(PolicyAction.DELETE, OWNER, review).allowed


class TestBookingPolicy:
    def test_only_booker_may_update(self, spot):
        booking = _booking(spot, 3, 5)

        assert authorize(PolicyAction.UPDATE, GUEST, booking).allowed
        assert not authorize(PolicyAction.UPDATE, OWNER, booking).allowed

    def test_booker_and_spot_owner_may_delete_future_booking(self, spot):
        booking = _booking(spot, 3, 5)

        assert authorize(PolicyAction.DELETE, GUEST, booking, today=TODAY).allowed
        assert authorize(PolicyAction.DELETE, OWNER, booking, today=TODAY).allowed
        assert not authorize(PolicyAction.DELETE, STRANGER, booking, today=TODAY).allowed

    def test_started_booking_cannot_be_deleted(self, spot):
        booking = _booking(spot, 0, 2)

        decision = authorize(PolicyAction.DELETE, GUEST, booking, today=TODAY)

        assert decision.decision is Decision.FORBIDDEN
        assert decision.reason == "Bookings that have been started can't be deleted"

    def test_started_check_precedes_ownership_on_delete(self, spot):
        decision = authorize(PolicyAction.DELETE, STRANGER, _booking(spot, 0, 2), today=TODAY)

        assert decision.reason == "Bookings that have been started can't be deleted"

    def test_delete_requires_today(self, spot):
        with pytest.raises(ValueError):
            authorize(PolicyAction.DELETE, GUEST, _booking(spot, 3, 5))


class TestEnforce:
    def test_not_found_uses_resource_label(self):
        with pytest.raises(NotFoundException) as exc_info:
            enforce(authorize(PolicyAction.UPDATE, OWNER, None), "Spot Image")

        assert exc_info.value.message == "Spot Image couldn't be found"

    def test_forbidden_carries_reason(self, spot):
        with pytest.raises(ForbiddenException) as exc_info:
            enforce(authorize(PolicyAction.CREATE_BOOKING, OWNER, spot), "Spot")

        assert exc_info.value.message == "Forbidden: Cannot book your own spot"

    def test_allowed_passes(self, spot):
        enforce(authorize(PolicyAction.UPDATE, OWNER, spot), "Spot")
