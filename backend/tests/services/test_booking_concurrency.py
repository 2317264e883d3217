"""
Concurrency tests for booking writes.

Each worker uses its own session on a file-backed SQLite database, where
SELECT ... FOR UPDATE takes no lock and only the per-spot booking lock keeps
two conflict checks apart.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
import threading
from typing import Iterator

import pytest
from sqlalchemy.orm import Session, sessionmaker

from spotbnb.core.exceptions import BookingConflictException
from spotbnb.database import Base, build_engine
from spotbnb.models.booking import Booking
from spotbnb.schemas.booking import BookingCreate
from spotbnb.services.booking_service import BookingService
from spotbnb.services.conflict_checker import ConflictChecker
from tests._utils.builders import create_spot, create_user


@pytest.fixture
def file_sessions(tmp_path) -> Iterator[sessionmaker]:
    engine = build_engine(f"sqlite:///{tmp_path / 'bookings.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    finally:
        engine.dispose()


class _HandoffChecker(ConflictChecker):
    """
    Holds the leading writer right after its conflict read until the trailing
    writer has read too, or one second has passed.
    """

    def __init__(self, db: Session, leading: bool, lead_read: threading.Event, trail_read: threading.Event):
        super().__init__(db)
        self.leading = leading
        self.lead_read = lead_read
        self.trail_read = trail_read

    def find_conflicts(self, *args, **kwargs):
        report = super().find_conflicts(*args, **kwargs)
        if self.leading:
            self.lead_read.set()
            self.trail_read.wait(timeout=1.0)
        else:
            self.trail_read.set()
        return report


def test_overlapping_creates_commit_one_booking(file_sessions: sessionmaker) -> None:
    seed = file_sessions()
    try:
        owner = create_user(seed, "race-owner")
        first_guest = create_user(seed, "race-guest-a")
        second_guest = create_user(seed, "race-guest-b")
        spot_id = create_spot(seed, owner).id
        guest_ids = [first_guest.id, second_guest.id]
    finally:
        seed.close()

    today = date.today()
    stay = BookingCreate(start_date=today + timedelta(days=5), end_date=today + timedelta(days=8))
    lead_read = threading.Event()
    trail_read = threading.Event()

    def _worker(index: int) -> str:
        leading = index == 0
        session = file_sessions()
        try:
            checker = _HandoffChecker(session, leading, lead_read, trail_read)
            service = BookingService(session, conflict_checker=checker)
            if not leading:
                lead_read.wait(timeout=5)
            service.create_booking(guest_ids[index], spot_id, stay, today=today)
            return "created"
        except BookingConflictException:
            return "conflict"
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=2) as executor:
        results = list(executor.map(_worker, [0, 1]))

    assert results == ["created", "conflict"]

    check = file_sessions()
    try:
        assert check.query(Booking).filter(Booking.spot_id == spot_id).count() == 1
    finally:
        check.close()
