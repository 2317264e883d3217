# backend/spotbnb/core/constants.py
"""Application-wide constants for SpotBnB."""

BRAND_NAME = "SpotBnB"

API_TITLE = f"{BRAND_NAME} API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "Booking marketplace API: spots, reviews, images, bookings and users."
API_PREFIX = "/api"

# Spot field limits
SPOT_NAME_MAX_LENGTH = 50
LAT_MIN, LAT_MAX = -90, 90
LNG_MIN, LNG_MAX = -180, 180

# Reviews
STARS_MIN, STARS_MAX = 1, 5
MAX_REVIEW_IMAGES = 10

# Spot listing pagination
DEFAULT_PAGE = 1
MAX_PAGE = 10
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 20

# Signup
USERNAME_MIN_LENGTH = 4
PASSWORD_MIN_LENGTH = 6

DELETED_MESSAGE = "Successfully deleted"
