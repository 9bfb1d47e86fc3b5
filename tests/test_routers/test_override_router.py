# tests/test_routers/test_override_router.py

import unittest
from datetime import date
from types import SimpleNamespace as Obj
from unittest.mock import patch
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from main import app
from core.database import get_db
from core.errors import ValidationError
from authz.deps import get_current_member
from approval.service import PendingItem


def override_row(**kw):
    data = dict(
        id=1, worker_id=10, override_date=date(2025, 3, 12), is_available=False,
        start_time=None, end_time=None, reason=None, status="pending",
        admin_notes=None, approved_by=None, approved_at=None, created_at=None, updated_at=None,
    )
    data.update(kw)
    return Obj(**data)


class OverrideRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): pass
        def _fake_db():
            yield FakeDB()

        self.member = Obj(id=10, is_admin=False)
        app.dependency_overrides[get_db] = _fake_db
        app.dependency_overrides[get_current_member] = lambda: self.member

        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_current_member, None)

    # --- LIST ---

    @patch("override.router.service.get_overrides")
    def test_list_defaults_to_caller(self, mock_list):
        mock_list.return_value = [override_row(), override_row(id=2, override_date=date(2025, 3, 1))]
        resp = self.client.get("/api/overrides?start=2025-03-01&end=2025-03-31")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(len(resp.json()), 2)
        args, kwargs = mock_list.call_args
        self.assertEqual(args[1], 10)
        self.assertEqual(kwargs["start"], date(2025, 3, 1))
        self.assertEqual(kwargs["end"], date(2025, 3, 31))

    @patch("override.router.service.get_overrides")
    def test_list_other_worker_forbidden(self, mock_list):
        resp = self.client.get("/api/overrides?worker_id=11")
        self.assertEqual(resp.status_code, 403)
        mock_list.assert_not_called()

    @patch("override.router.service.get_overrides")
    def test_admin_lists_other_worker(self, mock_list):
        self.member = Obj(id=1, is_admin=True)
        mock_list.return_value = []
        resp = self.client.get("/api/overrides?worker_id=11")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(mock_list.call_args[0][1], 11)

    # --- PENDING ---

    @patch("override.router.service.list_pending_overrides")
    def test_pending_scoped_for_worker(self, mock_pending):
        mock_pending.return_value = [PendingItem(override_row(), "Kalli")]
        resp = self.client.get("/api/overrides/pending")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()[0]["worker_name"], "Kalli")
        self.assertEqual(mock_pending.call_args.kwargs["worker_id"], 10)

    @patch("override.router.service.list_pending_overrides")
    def test_pending_team_wide_for_admin(self, mock_pending):
        self.member = Obj(id=1, is_admin=True)
        mock_pending.return_value = []
        resp = self.client.get("/api/overrides/pending")
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(mock_pending.call_args.kwargs["worker_id"])

    # --- GET /{id} ---

    @patch("override.router.service.get_override")
    def test_get_404(self, mock_get):
        mock_get.return_value = None
        resp = self.client.get("/api/overrides/99")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "override not found")

    @patch("override.router.service.get_override")
    def test_get_other_workers_row_forbidden(self, mock_get):
        mock_get.return_value = override_row(worker_id=11)
        resp = self.client.get("/api/overrides/1")
        self.assertEqual(resp.status_code, 403)

    # --- SUBMIT ---

    @patch("override.router.service.submit_override")
    def test_submit_201(self, mock_submit):
        mock_submit.return_value = override_row(reason="dentist")
        resp = self.client.post("/api/overrides", json={"override_date": "2025-03-12", "reason": "dentist"})
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(resp.json()["status"], "pending")
        dto = mock_submit.call_args[0][1]
        self.assertEqual(dto.worker_id, 10)
        self.assertFalse(dto.is_available)

    @patch("override.router.service.submit_override")
    def test_submit_half_window_422(self, mock_submit):
        resp = self.client.post("/api/overrides", json={"override_date": "2025-03-12", "start_time": "09:00"})
        self.assertEqual(resp.status_code, 422)
        mock_submit.assert_not_called()

    @patch("override.router.service.submit_override")
    def test_submit_service_validation_422(self, mock_submit):
        mock_submit.side_effect = ValidationError("start_time must be before end_time")
        resp = self.client.post("/api/overrides", json={"override_date": "2025-03-12"})
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(resp.json()["detail"], "start_time must be before end_time")

    @patch("override.router.service.submit_override")
    def test_submit_conflict_409(self, mock_submit):
        mock_submit.side_effect = IntegrityError("INSERT", {}, Exception("uq_override_worker_date"))
        resp = self.client.post("/api/overrides", json={"override_date": "2025-03-12"})
        self.assertEqual(resp.status_code, 409)

    @patch("override.router.service.submit_override")
    def test_submit_for_other_worker_forbidden(self, mock_submit):
        resp = self.client.post("/api/overrides", json={"override_date": "2025-03-12", "worker_id": 11})
        self.assertEqual(resp.status_code, 403)
        mock_submit.assert_not_called()


if __name__ == "__main__":
    unittest.main()
