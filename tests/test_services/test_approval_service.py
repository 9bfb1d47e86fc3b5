# tests/test_services/test_approval_service.py
import unittest
from datetime import date, datetime

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from core.database import Base
from core.errors import ValidationError, NotFoundError, InvalidStateError
from core.signals import change_feed, ChangeKind
import models_bootstrap  # noqa: F401
from member.models import TeamMember, MemberRole
from approval.models import ApprovalStatus, ExceptionKind, EXCEPTION_MODELS
from approval import service
from override.models import Override
from timeoff.models import TimeOffRequest, TimeOffType


class ApprovalServiceTests(unittest.TestCase):
    def setUp(self):
        # Fresh in-memory DB
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)

        TestingSession = sessionmaker(bind=self.engine, future=True)
        self.db: Session = TestingSession()

        # --- seed members ---
        w1 = TeamMember(name="Kalli", role=MemberRole.worker)
        w2 = TeamMember(name="Palli", role=MemberRole.worker)
        admin = TeamMember(name="Stjóri", role=MemberRole.admin)
        self.db.add_all([w1, w2, admin])
        self.db.commit()
        self.w1_id = w1.id
        self.w2_id = w2.id
        self.admin_id = admin.id

        # --- seed exceptions; created_at set so queue order is explicit ---
        ov_late = Override(worker_id=self.w1_id, override_date=date(2025, 3, 12), is_available=False,
                           created_at=datetime(2025, 3, 2, 12, 0))
        ov_early = Override(worker_id=self.w2_id, override_date=date(2025, 3, 13), is_available=True,
                            created_at=datetime(2025, 3, 1, 8, 0))
        ov_done = Override(worker_id=self.w2_id, override_date=date(2025, 3, 14), is_available=False,
                           status=ApprovalStatus.approved, created_at=datetime(2025, 2, 1, 8, 0))
        req = TimeOffRequest(worker_id=self.w1_id, start_date=date(2025, 3, 10), end_date=date(2025, 3, 14),
                             request_type=TimeOffType.vacation, days_requested=5)
        self.db.add_all([ov_late, ov_early, ov_done, req])
        self.db.commit()
        self.ov_late_id = ov_late.id
        self.ov_early_id = ov_early.id
        self.ov_done_id = ov_done.id
        self.req_id = req.id

        self.events = []
        self.unsubscribe = change_feed.subscribe(self.events.append)

    def tearDown(self):
        self.unsubscribe()
        self.db.close()
        self.engine.dispose()

    # ---- registry ----

    def test_models_registered_per_kind(self):
        self.assertIs(EXCEPTION_MODELS[ExceptionKind.override], Override)
        self.assertIs(EXCEPTION_MODELS[ExceptionKind.time_off], TimeOffRequest)
        self.assertIs(service.model_for("time_off"), TimeOffRequest)

    def test_unknown_kind(self):
        with self.assertRaises(ValidationError):
            service.model_for("shift_swap")

    # ---- pending queue ----

    def test_list_pending_oldest_first_with_names(self):
        pending = service.list_pending(self.db, ExceptionKind.override)
        self.assertEqual([p.row.id for p in pending], [self.ov_early_id, self.ov_late_id])
        self.assertEqual([p.worker_name for p in pending], ["Palli", "Kalli"])

    def test_list_pending_scoped_to_worker(self):
        pending = service.list_pending(self.db, "override", worker_id=self.w1_id)
        self.assertEqual([p.row.id for p in pending], [self.ov_late_id])

    def test_list_pending_falls_back_to_unknown_name(self):
        # worker row vanished without the cascade firing (sqlite does not enforce FKs by default)
        self.db.delete(self.db.get(TeamMember, self.w2_id))
        self.db.commit()
        pending = service.list_pending(self.db, ExceptionKind.override)
        names = {p.row.id: p.worker_name for p in pending}
        self.assertEqual(names[self.ov_early_id], "Unknown User")
        self.assertEqual(names[self.ov_late_id], "Kalli")

    # ---- decide ----

    def test_approve_sets_actor_and_time(self):
        row = service.decide(self.db, ExceptionKind.time_off, self.req_id, "approved", self.admin_id, "enjoy")
        self.assertEqual(row.status, ApprovalStatus.approved)
        self.assertEqual(row.approved_by, self.admin_id)
        self.assertIsNotNone(row.approved_at)
        self.assertEqual(row.admin_notes, "enjoy")
        self.assertEqual([(e.kind, e.worker_id) for e in self.events], [(ChangeKind.time_off, self.w1_id)])

    def test_deny_sets_actor_and_time(self):
        row = service.decide(self.db, ExceptionKind.override, self.ov_late_id, "denied", self.admin_id)
        self.assertEqual(row.status, ApprovalStatus.denied)
        self.assertEqual(row.approved_by, self.admin_id)
        self.assertIsNotNone(row.approved_at)
        self.assertIsNone(row.admin_notes)

    def test_decision_is_one_shot(self):
        service.decide(self.db, ExceptionKind.override, self.ov_late_id, "approved", self.admin_id)
        with self.assertRaises(InvalidStateError) as ctx:
            service.decide(self.db, ExceptionKind.override, self.ov_late_id, "denied", self.admin_id)
        self.assertNotIsInstance(ctx.exception, NotFoundError)
        row = service.get_exception(self.db, ExceptionKind.override, self.ov_late_id)
        self.assertEqual(row.status, ApprovalStatus.approved)
        self.assertEqual(len(self.events), 1)

    def test_decide_already_decided_seed(self):
        with self.assertRaises(InvalidStateError):
            service.decide(self.db, ExceptionKind.override, self.ov_done_id, "approved", self.admin_id)

    def test_decide_missing_row(self):
        with self.assertRaises(NotFoundError):
            service.decide(self.db, ExceptionKind.override, 9999, "approved", self.admin_id)

    def test_decide_bad_outcome(self):
        for bad in ("pending", "maybe"):
            with self.subTest(decision=bad), self.assertRaises(ValidationError):
                service.decide(self.db, ExceptionKind.override, self.ov_late_id, bad, self.admin_id)
        row = service.get_exception(self.db, ExceptionKind.override, self.ov_late_id)
        self.assertEqual(row.status, ApprovalStatus.pending)

    def test_decided_rows_leave_queue(self):
        service.decide(self.db, ExceptionKind.override, self.ov_early_id, "denied", self.admin_id)
        pending = service.list_pending(self.db, ExceptionKind.override)
        self.assertEqual([p.row.id for p in pending], [self.ov_late_id])

    # ---- annotate ----

    def test_annotate_after_decision(self):
        service.decide(self.db, ExceptionKind.time_off, self.req_id, "denied", self.admin_id, "busy week")
        self.events.clear()
        row = service.annotate(self.db, ExceptionKind.time_off, self.req_id, "busy week, try May")
        self.assertEqual(row.admin_notes, "busy week, try May")
        self.assertEqual(row.status, ApprovalStatus.denied)
        self.assertEqual([(e.kind, e.worker_id) for e in self.events], [(ChangeKind.time_off, self.w1_id)])

    def test_annotate_missing_row(self):
        with self.assertRaises(NotFoundError):
            service.annotate(self.db, ExceptionKind.time_off, 9999, "x")


if __name__ == "__main__":
    unittest.main()
