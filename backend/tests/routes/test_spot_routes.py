# backend/tests/routes/test_spot_routes.py
"""
Tests for spot listing, detail and owner CRUD.
"""

from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from spotbnb.models.booking import Booking
from spotbnb.models.spot import Spot, SpotImage
from tests._utils.builders import add_spot_image, create_booking, create_review, create_spot

NEW_SPOT = {
    "address": "123 Disney Lane",
    "city": "San Francisco",
    "state": "California",
    "country": "United States of America",
    "lat": 37.7645358,
    "lng": -122.4730327,
    "name": "App Academy",
    "description": "Place where web developers are created",
    "price": 123,
}


class TestCreateSpot:
    def test_create_spot(self, client: TestClient, owner, owner_headers):
        response = client.post("/api/spots", json=NEW_SPOT, headers=owner_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["ownerId"] == owner.id
        assert body["name"] == "App Academy"
        assert body["price"] == 123.0
        assert "createdAt" in body

    def test_requires_authentication(self, client: TestClient):
        response = client.post("/api/spots", json=NEW_SPOT)

        assert response.status_code == 401

    def test_latitude_out_of_range(self, client: TestClient, owner_headers):
        response = client.post("/api/spots", json={**NEW_SPOT, "lat": 95}, headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["errors"] == {"lat": "Latitude must be within -90 and 90"}

    def test_price_must_be_positive(self, client: TestClient, owner_headers):
        response = client.post("/api/spots", json={**NEW_SPOT, "price": 0}, headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["errors"] == {"price": "Price per day must be a positive number"}


class TestListSpots:
    def test_listing_includes_rating_and_preview(
        self, client: TestClient, db: Session, spot, guest, other_user
    ):
        add_spot_image(db, spot, "https://img.example.com/inside.png")
        add_spot_image(db, spot, "https://img.example.com/front.png", preview=True)
        create_review(db, spot, guest, stars=3)
        create_review(db, spot, other_user, stars=4)

        response = client.get("/api/spots")

        assert response.status_code == 200
        body = response.json()
        assert body["page"] == 1
        assert body["size"] == 20
        [listed] = body["Spots"]
        assert listed["id"] == spot.id
        assert listed["avgRating"] == 3.5
        assert listed["previewImage"] == "https://img.example.com/front.png"

    def test_unrated_spot_has_null_rating(self, client: TestClient, spot):
        listed = client.get("/api/spots").json()["Spots"][0]

        assert listed["avgRating"] is None
        assert listed["previewImage"] is None

    def test_filters_and_pagination(self, client: TestClient, db: Session, owner):
        for index in range(3):
            create_spot(db, owner, name=f"Budget {index}", price=40.0 + index)
        create_spot(db, owner, name="Penthouse", price=900.0)

        budget = client.get("/api/spots", params={"maxPrice": "100"}).json()
        assert {spot["name"] for spot in budget["Spots"]} == {"Budget 0", "Budget 1", "Budget 2"}

        page_two = client.get("/api/spots", params={"page": "2", "size": "3"}).json()
        assert page_two["page"] == 2
        assert page_two["size"] == 3
        assert len(page_two["Spots"]) == 1

    def test_invalid_query_reports_every_parameter(self, client: TestClient):
        response = client.get("/api/spots", params={"page": "0", "size": "50", "minLat": "abc"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Bad Request"
        assert body["errors"] == {
            "page": "Page must be between 1 and 10",
            "size": "Size must be between 1 and 20",
            "minLat": "Minimum latitude is invalid",
        }

    def test_current_user_spots(self, client: TestClient, db: Session, spot, other_user, owner_headers):
        create_spot(db, other_user, name="Not Mine")

        response = client.get("/api/spots/current", headers=owner_headers)

        assert response.status_code == 200
        assert [listed["id"] for listed in response.json()["Spots"]] == [spot.id]


class TestSpotDetail:
    def test_detail(self, client: TestClient, db: Session, spot, owner, guest):
        image = add_spot_image(db, spot, "https://img.example.com/front.png", preview=True)
        create_review(db, spot, guest, stars=5)

        response = client.get(f"/api/spots/{spot.id}")

        assert response.status_code == 200
        body = response.json()
        assert body["numReviews"] == 1
        assert body["avgStarRating"] == 5.0
        assert body["SpotImages"] == [
            {"id": image.id, "url": "https://img.example.com/front.png", "preview": True}
        ]
        assert body["Owner"] == {"id": owner.id, "firstName": "Demo", "lastName": "Owner"}

    def test_missing_spot(self, client: TestClient):
        response = client.get("/api/spots/01HZZZZZZZZZZZZZZZZZZZZZZZ")

        assert response.status_code == 404
        assert response.json() == {"message": "Spot couldn't be found", "code": "NOT_FOUND"}


class TestUpdateSpot:
    def test_owner_replaces_spot(self, client: TestClient, spot, owner_headers):
        response = client.put(
            f"/api/spots/{spot.id}", json={**NEW_SPOT, "name": "Renamed", "price": 150}, headers=owner_headers
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"
        assert response.json()["price"] == 150.0

    def test_non_owner_is_forbidden(self, client: TestClient, spot, other_headers):
        response = client.put(f"/api/spots/{spot.id}", json=NEW_SPOT, headers=other_headers)

        assert response.status_code == 403
        assert response.json() == {"message": "Forbidden", "code": "FORBIDDEN"}

    def test_missing_spot(self, client: TestClient, owner_headers):
        response = client.put("/api/spots/missing", json=NEW_SPOT, headers=owner_headers)

        assert response.status_code == 404


class TestDeleteSpot:
    def test_delete_cascades_to_children(self, client: TestClient, db: Session, spot, guest, owner_headers, today):
        spot_id = spot.id
        add_spot_image(db, spot, "https://img.example.com/front.png", preview=True)
        create_booking(db, spot, guest, today + timedelta(days=3), today + timedelta(days=5))

        response = client.delete(f"/api/spots/{spot_id}", headers=owner_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Successfully deleted"}
        db.expire_all()
        assert db.query(Spot).filter(Spot.id == spot_id).count() == 0
        assert db.query(SpotImage).filter(SpotImage.spot_id == spot_id).count() == 0
        assert db.query(Booking).filter(Booking.spot_id == spot_id).count() == 0
        assert client.get(f"/api/spots/{spot_id}").status_code == 404

    def test_non_owner_cannot_delete(self, client: TestClient, spot, guest_headers):
        response = client.delete(f"/api/spots/{spot.id}", headers=guest_headers)

        assert response.status_code == 403
