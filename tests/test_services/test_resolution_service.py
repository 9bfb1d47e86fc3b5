# tests/test_services/test_resolution_service.py
import unittest
from datetime import date, time
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from core.database import Base
from core.errors import NotFoundError
import models_bootstrap  # noqa: F401
from member.models import TeamMember, MemberRole
from pattern.models import WeeklyPattern
from override.models import Override
from timeoff.models import TimeOffRequest, TimeOffType
from approval.models import ApprovalStatus
from resolution.engine import OverridePolicy, Source, Status, TimeWindow
from resolution import service


class ResolutionServiceTests(unittest.TestCase):
    def setUp(self):
        # Fresh in-memory DB
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)

        TestingSession = sessionmaker(bind=self.engine, future=True)
        self.db: Session = TestingSession()

        # --- seed member ---
        w = TeamMember(name="Kalli", role=MemberRole.worker)
        self.db.add(w)
        self.db.commit()
        self.w_id = w.id

        # --- seed rows ---
        self.db.add_all([
            # Monday off
            WeeklyPattern(worker_id=self.w_id, day_of_week=1, is_available=False),
            WeeklyPattern(worker_id=self.w_id, day_of_week=2, is_available=True,
                          start_time=time(9), end_time=time(17)),
            # time off week of 10 March with an available override inside it
            TimeOffRequest(worker_id=self.w_id, start_date=date(2025, 3, 10), end_date=date(2025, 3, 14),
                           request_type=TimeOffType.vacation, days_requested=5, status=ApprovalStatus.approved),
            Override(worker_id=self.w_id, override_date=date(2025, 3, 12), is_available=True,
                     status=ApprovalStatus.approved),
            # pending override on a Tuesday
            Override(worker_id=self.w_id, override_date=date(2025, 3, 18), is_available=False),
            # future approved and pending time off
            TimeOffRequest(worker_id=self.w_id, start_date=date(2025, 4, 1), end_date=date(2025, 4, 3),
                           request_type=TimeOffType.personal, days_requested=3, status=ApprovalStatus.approved),
            TimeOffRequest(worker_id=self.w_id, start_date=date(2025, 5, 1), end_date=date(2025, 5, 1),
                           request_type=TimeOffType.unpaid, days_requested=1),
        ])
        self.db.commit()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_unavailable_monday_pattern(self):
        res = service.resolve_for_worker(self.db, self.w_id, date(2025, 3, 3), policy=OverridePolicy.approved_only)
        self.assertEqual((res.status, res.source), (Status.unavailable, Source.pattern))

    def test_time_off_outranks_override(self):
        res = service.resolve_for_worker(self.db, self.w_id, date(2025, 3, 12))
        self.assertEqual((res.status, res.source), (Status.unavailable, Source.time_off))
        self.assertEqual(res.detail, "vacation")

    def test_pending_override_follows_policy(self):
        on = date(2025, 3, 18)
        approved_only = service.resolve_for_worker(self.db, self.w_id, on, policy=OverridePolicy.approved_only)
        self.assertEqual(approved_only.source, Source.pattern)
        self.assertEqual(approved_only.status, Status.available)
        any_status = service.resolve_for_worker(self.db, self.w_id, on, policy=OverridePolicy.any_status)
        self.assertEqual(any_status.source, Source.override)
        self.assertEqual(any_status.status, Status.unavailable)

    def test_policy_from_settings(self):
        on = date(2025, 3, 18)
        with patch("resolution.service.settings") as fake:
            fake.AVAILABILITY_OVERRIDE_POLICY = "any_status"
            self.assertEqual(service.current_policy(), OverridePolicy.any_status)
            res = service.resolve_for_worker(self.db, self.w_id, on)
        self.assertEqual(res.source, Source.override)

    def test_window_outside_pattern(self):
        res = service.resolve_for_worker(self.db, self.w_id, date(2025, 3, 25), TimeWindow(time(16), time(19)))
        self.assertEqual(res.status, Status.unavailable)
        self.assertEqual(res.detail, "outside 09:00-17:00")

    def test_stored_rows_resolve_by_engine_rules(self):
        # Thursday off, times left over from an earlier edit
        self.db.add(WeeklyPattern(worker_id=self.w_id, day_of_week=4, is_available=False,
                                  start_time=time(9), end_time=time(17)))
        self.db.commit()
        thursday = service.resolve_for_worker(self.db, self.w_id, date(2025, 3, 20), TimeWindow(time(10), time(11)))
        self.assertEqual((thursday.status, thursday.detail), (Status.unavailable, "not available"))

        last_day = service.resolve_for_worker(self.db, self.w_id, date(2025, 3, 14))
        self.assertEqual(last_day.source, Source.time_off)
        day_after = service.resolve_for_worker(self.db, self.w_id, date(2025, 3, 15))
        self.assertEqual(day_after.source, Source.default)

    def test_unknown_worker(self):
        with self.assertRaises(NotFoundError):
            service.resolve_for_worker(self.db, 999, date(2025, 3, 12))

    def test_load_worker_records_limits_exceptions_to_range(self):
        rec = service.load_worker_records(self.db, self.w_id, date(2025, 3, 12), date(2025, 3, 12))
        self.assertEqual(len(rec.patterns), 2)
        self.assertEqual([o.override_date for o in rec.overrides], [date(2025, 3, 12)])
        self.assertEqual([t.start_date for t in rec.time_off], [date(2025, 3, 10)])

    def test_worker_summary(self):
        summary = service.worker_summary(self.db, self.w_id, date(2025, 3, 12))
        self.assertEqual(summary.worker_id, self.w_id)
        self.assertEqual(summary.today.source, Source.time_off)
        self.assertEqual(summary.pending_requests, 1)
        self.assertEqual(summary.pending_overrides, 1)
        self.assertEqual([t.start_date for t in summary.upcoming_time_off], [date(2025, 4, 1)])
        self.assertEqual(
            [o.override_date for o in summary.recent_overrides],
            [date(2025, 3, 18), date(2025, 3, 12)],
        )


if __name__ == "__main__":
    unittest.main()
