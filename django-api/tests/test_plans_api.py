"""Integration tests for personal plans.

Run with: pytest tests/test_plans_api.py -v
"""

import uuid

import pytest
from rest_framework.test import APIClient

from festivals.models import Plan, PlanItem


@pytest.mark.django_db
class TestMyPlan:
    """Tests for GET /api/my/{slug}"""

    def test_anonymous_user_is_redirected_to_sign_in(self, api_client: APIClient, lineup):
        response = api_client.get("/api/my/test-fest")
        assert response.status_code == 302
        assert response["Location"].startswith("/accounts/login/?next=")
        assert "next=/api/my/test-fest" in response["Location"]

    def test_plan_created_lazily_once(self, auth_client: APIClient, user, lineup):
        first = auth_client.get("/api/my/test-fest")
        second = auth_client.get("/api/my/test-fest")
        assert first.status_code == 200
        assert first.json()["plan"]["id"] == second.json()["plan"]["id"]
        assert first.json()["plan"]["name"] == "My Plan"
        assert Plan.objects.filter(user=user).count() == 1

    def test_plan_lists_sets_sorted_with_conflicts(self, auth_client: APIClient, lineup, ids):
        for artist in ("Baz", "Foo", "Bar"):
            auth_client.post("/api/plan/test-fest/add", {"set_id": ids[artist]}, format="json")

        body = auth_client.get("/api/my/test-fest").json()
        assert [s["artist"] for s in body["sets"]] == ["Foo", "Bar", "Baz"]
        assert set(body["conflicts"]) == {ids["Foo"], ids["Bar"], ids["Baz"]}
        assert [ids["Foo"], ids["Bar"]] in body["conflict_pairs"]
        assert body["ical_url"] == f"/api/ical/{body['plan']['id']}"

    def test_unknown_festival(self, auth_client: APIClient):
        response = auth_client.get("/api/my/missing")
        assert response.status_code == 404

    def test_plan_page_includes_planner_for_first_day(self, auth_client: APIClient, lineup, ids):
        auth_client.post("/api/plan/test-fest/add", {"set_id": ids["Foo"]}, format="json")
        planner = auth_client.get("/api/my/test-fest").json()["planner"]
        assert planner["day"] == "2025-08-29"
        assert planner["days"] == ["2025-08-29", "2025-08-30"]
        assert planner["selected"] == [ids["Foo"]]
        assert planner["selected_by_day"] == {"2025-08-29": [ids["Foo"]]}

    def test_plan_page_follows_requested_day(self, auth_client: APIClient, lineup):
        first = auth_client.get("/api/my/test-fest?day=2025-08-29").json()["planner"]
        second = auth_client.get("/api/my/test-fest?day=2025-08-30").json()["planner"]
        assert second["day"] == "2025-08-30"
        forest = next(c for c in second["grouping"]["columns"] if c["stage"] == "Forest")
        assert [s["artist"] for s in forest["sets"]] == ["Late"]
        assert first["grouping"] != second["grouping"]

    @pytest.mark.parametrize("day", ["2099-01-01", "not-a-day"])
    def test_plan_page_rejects_unknown_day(self, auth_client: APIClient, lineup, day):
        response = auth_client.get(f"/api/my/test-fest?day={day}")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_DAY"


@pytest.mark.django_db
class TestToggle:
    """Tests for POST /api/plan/{slug}/toggle"""

    def test_toggle_adds_then_removes(self, auth_client: APIClient, lineup, ids):
        response = auth_client.post("/api/plan/test-fest/toggle", {"set_id": ids["Foo"]}, format="json")
        assert response.status_code == 200
        assert response.json()["selected"] is True
        assert response.json()["set_ids"] == [ids["Foo"]]
        assert PlanItem.objects.count() == 1

        response = auth_client.post("/api/plan/test-fest/toggle", {"set_id": ids["Foo"]}, format="json")
        assert response.json()["selected"] is False
        assert response.json()["set_ids"] == []
        assert PlanItem.objects.count() == 0

    def test_toggle_reports_conflicts(self, auth_client: APIClient, lineup, ids):
        auth_client.post("/api/plan/test-fest/toggle", {"set_id": ids["Foo"]}, format="json")
        response = auth_client.post("/api/plan/test-fest/toggle", {"set_id": ids["Bar"]}, format="json")
        assert sorted(response.json()["conflicts"]) == sorted([ids["Foo"], ids["Bar"]])

    def test_toggle_requires_authentication(self, api_client: APIClient, lineup, ids):
        response = api_client.post("/api/plan/test-fest/toggle", {"set_id": ids["Foo"]}, format="json")
        assert response.status_code == 403
        assert PlanItem.objects.count() == 0

    def test_toggle_validation_error(self, auth_client: APIClient, lineup):
        response = auth_client.post("/api/plan/test-fest/toggle", {"set_id": "not-a-uuid"}, format="json")
        assert response.status_code == 400
        body = response.json()["error"]
        assert body["code"] == "VALIDATION_ERROR"
        assert "set_id" in body["details"]

    def test_toggle_missing_payload(self, auth_client: APIClient, lineup):
        response = auth_client.post("/api/plan/test-fest/toggle", {}, format="json")
        assert response.status_code == 400

    def test_toggle_set_from_other_festival(self, auth_client: APIClient, lineup):
        response = auth_client.post("/api/plan/test-fest/toggle", {"set_id": str(uuid.uuid4())}, format="json")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SET_NOT_FOUND"

    def test_toggle_unknown_festival(self, auth_client: APIClient, ids):
        response = auth_client.post("/api/plan/missing/toggle", {"set_id": ids["Foo"]}, format="json")
        assert response.status_code == 404


@pytest.mark.django_db
class TestAddRemove:
    """Tests for POST /api/plan/{slug}/add and /remove"""

    def test_add_twice_keeps_single_item(self, auth_client: APIClient, lineup, ids):
        for _ in range(2):
            response = auth_client.post("/api/plan/test-fest/add", {"set_id": ids["Baz"]}, format="json")
            assert response.status_code == 200
            assert response.json()["selected"] is True
        assert PlanItem.objects.count() == 1

    def test_remove_absent_set_is_noop(self, auth_client: APIClient, lineup, ids):
        response = auth_client.post("/api/plan/test-fest/remove", {"set_id": ids["Baz"]}, format="json")
        assert response.status_code == 200
        assert response.json()["selected"] is False

    def test_remove_selected_set(self, auth_client: APIClient, lineup, ids):
        auth_client.post("/api/plan/test-fest/add", {"set_id": ids["Baz"]}, format="json")
        auth_client.post("/api/plan/test-fest/remove", {"set_id": ids["Baz"]}, format="json")
        assert PlanItem.objects.count() == 0

    def test_plans_are_per_user(self, auth_client: APIClient, django_user_model, lineup, ids):
        auth_client.post("/api/plan/test-fest/add", {"set_id": ids["Foo"]}, format="json")

        other = django_user_model.objects.create_user(username="bo", email="bo@example.com", password="pw")
        other_client = APIClient()
        other_client.force_authenticate(user=other)
        body = other_client.get("/api/my/test-fest").json()
        assert body["sets"] == []


@pytest.mark.django_db
class TestPlanner:
    """Tests for /api/my/{slug}/planner"""

    def test_planner_marks_selected_and_conflicting_sets(self, auth_client: APIClient, lineup, ids):
        auth_client.post("/api/plan/test-fest/add", {"set_id": ids["Foo"]}, format="json")
        auth_client.post("/api/plan/test-fest/add", {"set_id": ids["Bar"]}, format="json")

        response = auth_client.get("/api/my/test-fest/planner?day=2025-08-29")
        assert response.status_code == 200
        body = response.json()
        main = next(c for c in body["grouping"]["columns"] if c["stage"] == "Main")
        assert [(s["artist"], s["selected"], s["conflict"]) for s in main["sets"]] == [
            ("Foo", True, True),
            ("Bar", True, True),
        ]
        assert body["days"] == ["2025-08-29", "2025-08-30"]

    def test_drag_to_schedule_then_back_to_origin_stage(self, auth_client: APIClient, lineup, ids):
        response = auth_client.post(
            "/api/my/test-fest/planner", {"set_id": ids["Baz"], "action": "drop_on_schedule"}, format="json"
        )
        assert response.json()["selected"] is True

        response = auth_client.post(
            "/api/my/test-fest/planner",
            {"set_id": ids["Baz"], "action": "drop_on_stage", "stage": "Main"},
            format="json",
        )
        assert response.json()["selected"] is True

        response = auth_client.post(
            "/api/my/test-fest/planner",
            {"set_id": ids["Baz"], "action": "drop_on_stage", "stage": "Forest"},
            format="json",
        )
        assert response.json()["selected"] is False
        assert PlanItem.objects.count() == 0

    def test_drop_on_stage_requires_stage(self, auth_client: APIClient, lineup, ids):
        response = auth_client.post(
            "/api/my/test-fest/planner", {"set_id": ids["Baz"], "action": "drop_on_stage"}, format="json"
        )
        assert response.status_code == 400

    def test_planner_requires_authentication(self, api_client: APIClient, lineup):
        assert api_client.get("/api/my/test-fest/planner").status_code == 403

    def test_planner_rejects_day_outside_festival(self, auth_client: APIClient, lineup):
        response = auth_client.get("/api/my/test-fest/planner?day=2030-01-01")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_DAY"
