from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from spotbnb.models.review import ReviewImage
from spotbnb.models.spot import SpotImage
from tests._utils.builders import add_review_images, add_spot_image, create_review


class TestSpotImages:
    def test_owner_adds_image(self, client: TestClient, spot, owner_headers):
        response = client.post(
            f"/api/spots/{spot.id}/images",
            json={"url": "https://img.example.com/front.png", "preview": True},
            headers=owner_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["url"] == "https://img.example.com/front.png"
        assert body["preview"] is True
        assert set(body) == {"id", "url", "preview"}

    def test_url_is_required(self, client: TestClient, spot, owner_headers):
        response = client.post(f"/api/spots/{spot.id}/images", json={"preview": False}, headers=owner_headers)

        assert response.status_code == 400
        assert response.json()["errors"] == {"url": "Image url is required"}

    def test_non_owner_cannot_add_image(self, client: TestClient, spot, guest_headers):
        response = client.post(
            f"/api/spots/{spot.id}/images", json={"url": "https://img.example.com/x.png"}, headers=guest_headers
        )

        assert response.status_code == 403

    def test_missing_spot(self, client: TestClient, owner_headers):
        response = client.post(
            "/api/spots/missing/images", json={"url": "https://img.example.com/x.png"}, headers=owner_headers
        )

        assert response.status_code == 404

    def test_owner_deletes_image(self, client: TestClient, db: Session, spot, owner_headers):
        image_id = add_spot_image(db, spot, "https://img.example.com/front.png").id

        response = client.delete(f"/api/spotImages/{image_id}", headers=owner_headers)

        assert response.status_code == 200
        db.expire_all()
        assert db.query(SpotImage).filter(SpotImage.id == image_id).count() == 0

    def test_non_owner_cannot_delete_image(self, client: TestClient, db: Session, spot, guest_headers):
        image = add_spot_image(db, spot, "https://img.example.com/front.png")

        response = client.delete(f"/api/spotImages/{image.id}", headers=guest_headers)

        assert response.status_code == 403

    def test_missing_spot_image(self, client: TestClient, owner_headers):
        response = client.delete("/api/spotImages/missing", headers=owner_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Spot Image couldn't be found"


class TestReviewImageDeletion:
    def test_author_deletes_image(self, client: TestClient, db: Session, spot, guest, guest_headers):
        review = create_review(db, spot, guest)
        add_review_images(db, review, 1)
        image_id = db.query(ReviewImage).filter(ReviewImage.review_id == review.id).one().id

        response = client.delete(f"/api/reviewImages/{image_id}", headers=guest_headers)

        assert response.status_code == 200
        db.expire_all()
        assert db.query(ReviewImage).filter(ReviewImage.id == image_id).count() == 0

    def test_spot_owner_cannot_delete_review_image(
        self, client: TestClient, db: Session, spot, guest, owner_headers
    ):
        review = create_review(db, spot, guest)
        add_review_images(db, review, 1)
        image_id = db.query(ReviewImage).filter(ReviewImage.review_id == review.id).one().id

        response = client.delete(f"/api/reviewImages/{image_id}", headers=owner_headers)

        assert response.status_code == 403

    def test_missing_review_image(self, client: TestClient, guest_headers):
        response = client.delete("/api/reviewImages/missing", headers=guest_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Review Image couldn't be found"
