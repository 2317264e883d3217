from pydantic import ValidationError
import pytest

from spotbnb.errors import field_errors
from spotbnb.schemas.booking import BookingCreate
from spotbnb.schemas.spot import SpotCreate, SpotListQuery
from spotbnb.schemas.user import UserCreate


def _errors(model, **data):
    with pytest.raises(ValidationError) as exc_info:
        model(**data)
    return field_errors(exc_info.value.errors())


VALID_SPOT = {
    "address": "123 Disney Lane",
    "city": "San Francisco",
    "state": "California",
    "country": "United States of America",
    "lat": 37.76,
    "lng": -122.47,
    "name": "App Academy",
    "description": "Place where web developers are created",
    "price": 123,
}


class TestSpotCreate:
    def test_accepts_camel_case_payload(self):
        spot = SpotCreate.model_validate(VALID_SPOT)

        assert spot.price == 123.0
        assert spot.lat == pytest.approx(37.76)

    def test_empty_payload_reports_every_field(self):
        errors = _errors(SpotCreate)

        assert errors == {
            "address": "Street address is required",
            "city": "City is required",
            "state": "State is required",
            "country": "Country is required",
            "lat": "Latitude must be within -90 and 90",
            "lng": "Longitude must be within -180 and 180",
            "name": "Name must be less than 50 characters",
            "description": "Description is required",
            "price": "Price per day must be a positive number",
        }

    @pytest.mark.parametrize(
        "field, value, message",
        [
            ("lat", 95, "Latitude must be within -90 and 90"),
            ("lng", "west", "Longitude must be within -180 and 180"),
            ("price", 0, "Price per day must be a positive number"),
            ("name", "x" * 51, "Name must be less than 50 characters"),
        ],
    )
    def test_single_bad_field(self, field, value, message):
        assert _errors(SpotCreate, **{**VALID_SPOT, field: value}) == {field: message}

    def test_unknown_field_is_rejected(self):
        assert _errors(SpotCreate, **VALID_SPOT, rating=5) == {"rating": "rating is not allowed"}


class TestSpotListQuery:
    def test_defaults(self):
        query = SpotListQuery()

        assert (query.page, query.size, query.offset) == (1, 20, 0)

    def test_offset_from_page_and_size(self):
        assert SpotListQuery(page="3", size="5").offset == 10

    def test_invalid_values_report_camel_case_fields(self):
        errors = _errors(SpotListQuery, page="0", size="21", min_lat="abc", min_price="-1")

        assert errors == {
            "page": "Page must be between 1 and 10",
            "size": "Size must be between 1 and 20",
            "minLat": "Minimum latitude is invalid",
            "minPrice": "Minimum price must be greater than or equal to 0",
        }


class TestUserCreate:
    def test_username_cannot_be_email(self):
        errors = _errors(
            UserCreate,
            firstName="Demo",
            lastName="Lition",
            email="demo@spotbnb.io",
            username="demo@spotbnb.io",
            password="password",
        )

        assert errors == {"username": "Username cannot be an email."}

    def test_short_password_and_bad_email(self):
        errors = _errors(
            UserCreate,
            firstName="Demo",
            lastName="Lition",
            email="not-an-email",
            username="demolition",
            password="abc",
        )

        assert errors == {
            "email": "Please provide a valid email.",
            "password": "Password must be 6 characters or more.",
        }


class TestBookingCreate:
    def test_dates_must_be_date_only(self):
        errors = _errors(BookingCreate, startDate="2030/01/01", endDate="2030-01-03")

        assert errors == {"startDate": "startDate must be a YYYY-MM-DD date"}

    def test_missing_dates_parse_to_none(self):
        payload = BookingCreate()

        assert payload.start_date is None
        assert payload.end_date is None
