from datetime import timedelta

from sqlalchemy.orm import Session

from spotbnb.services.conflict_checker import ConflictChecker
from tests._utils.builders import create_booking, create_spot


class TestConflictChecker:
    def test_reports_colliding_bookings_for_spot(self, db: Session, spot, guest, future_booking, today):
        report = ConflictChecker(db).find_conflicts(
            spot.id, today + timedelta(days=12), today + timedelta(days=15)
        )

        assert [booking.id for booking in report.bookings] == [future_booking.id]
        assert report.start_date_conflict
        assert not report.end_date_conflict

    def test_other_spots_do_not_conflict(self, db: Session, owner, guest, future_booking, today):
        second_spot = create_spot(db, owner, name="Second Spot")

        report = ConflictChecker(db).find_conflicts(
            second_spot.id, future_booking.start_date, future_booking.end_date
        )

        assert not report.has_conflict

    def test_excludes_booking_being_edited(self, db: Session, spot, guest, future_booking):
        report = ConflictChecker(db).find_conflicts(
            spot.id,
            future_booking.start_date,
            future_booking.end_date,
            exclude_booking_id=future_booking.id,
        )

        assert not report.has_conflict

    def test_records_operation_metrics(self, db: Session, spot, guest, today):
        checker = ConflictChecker(db)
        checker.reset_metrics()

        checker.find_conflicts(spot.id, today, today + timedelta(days=1))

        metrics = checker.get_metrics()
        assert metrics["find_conflicts"]["count"] == 1
        assert metrics["find_conflicts"]["success_rate"] == 1.0

    def test_adjacent_bookings_on_both_sides(self, db: Session, spot, guest, other_user, today):
        create_booking(db, spot, guest, today + timedelta(days=1), today + timedelta(days=3))
        create_booking(db, spot, other_user, today + timedelta(days=5), today + timedelta(days=7))

        report = ConflictChecker(db).find_conflicts(
            spot.id, today + timedelta(days=3), today + timedelta(days=5)
        )

        assert not report.has_conflict
