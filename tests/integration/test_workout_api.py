"""
End-to-end API tests for accounts, workout sessions, strength lifts and
metcon workouts.

Each test gets a fresh app wired to the seeded in-memory store (users
user-a and user-b plus the reference catalogs) and a bearer token built
with the test JWT secret.
"""
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from backend.auth import decode_access_claims
from domain.models.workout_session import utc_today
from tests.fakes import AMRAP, BACK_SQUAT, BENCH_PRESS, PULL_UP, ROW, seed_session

# All tests in this module use api_client (TestClient) - mark as integration tests
pytestmark = pytest.mark.integration


@pytest.fixture
def session_id(seeded_store):
    """A session dated today owned by user-a."""
    return seed_session(seeded_store, "session-a").id


# =============================================================================
# Health and Auth
# =============================================================================


def test_health_endpoint(api_client):
    resp = api_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_readiness_reports_cache_stats(api_client):
    resp = api_client.get("/health/ready")
    assert resp.status_code == 200
    assert resp.json()["database"] is True
    assert resp.json()["cache"]["entries"] >= 0


def test_data_endpoints_require_token(api_client):
    resp = api_client.get("/workout-sessions")
    assert resp.status_code == 401


def test_garbage_token_rejected(api_client):
    resp = api_client.get("/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_register_new_user_and_read_profile(api_client, identity_token):
    resp = api_client.post(
        "/auth/register",
        json={"id_token": identity_token("New@Example.com"), "name": "New"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "new@example.com"
    assert body["user"]["last_login_date"] is not None

    headers = {"Authorization": f"Bearer {body['access_token']}"}
    me = api_client.get("/users/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["id"] == body["user"]["id"]


def test_register_existing_email_refused(api_client, identity_token):
    resp = api_client.post(
        "/auth/register",
        json={"id_token": identity_token("user-a@example.com"), "name": "Intruder"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid operation"
    assert "access_token" not in resp.json()

    lookup = api_client.get("/users/check-email", params={"email": "user-a@example.com"})
    assert lookup.json() == {"available": False}


def test_register_requires_identity_token(api_client):
    resp = api_client.post(
        "/auth/register", json={"email": "user-a@example.com", "name": "Intruder"}
    )
    assert resp.status_code == 422
    assert "access_token" not in resp.json()


def test_register_with_forged_identity_token(api_client, identity_token):
    forged = identity_token("user-a@example.com", secret="attacker-chosen-secret-for-hs256")
    resp = api_client.post("/auth/register", json={"id_token": forged, "name": "Intruder"})
    assert resp.status_code == 401


def test_login_with_verified_identity(api_client, identity_token, test_settings):
    resp = api_client.post("/auth/login", json={"id_token": identity_token("USER-A@example.com")})
    assert resp.status_code == 200
    body = resp.json()
    assert body["user"]["id"] == "user-a"
    assert body["user"]["name"] == "User-A"

    claims = decode_access_claims(body["access_token"], test_settings)
    assert claims["sub"] == "user-a"
    assert claims["role"] == "user"


def test_login_with_forged_identity_token(api_client, identity_token):
    forged = identity_token("user-a@example.com", secret="attacker-chosen-secret-for-hs256")
    resp = api_client.post("/auth/login", json={"id_token": forged})
    assert resp.status_code == 401
    assert "access_token" not in resp.json()


def test_login_with_unverified_email(api_client, identity_token):
    token = identity_token("user-a@example.com", email_verified=False)
    assert api_client.post("/auth/login", json={"id_token": token}).status_code == 401


def test_login_creates_account_on_first_sign_in(api_client, identity_token):
    token = identity_token("fresh@example.com", name="Fresh Lifter")
    resp = api_client.post("/auth/login", json={"id_token": token})
    assert resp.status_code == 200
    assert resp.json()["user"]["name"] == "Fresh Lifter"
    assert resp.json()["user"]["email"] == "fresh@example.com"


def test_login_grants_admin_role(api_client, identity_token, test_settings):
    resp = api_client.post("/auth/login", json={"id_token": identity_token("admin@example.com")})
    assert resp.status_code == 200
    claims = decode_access_claims(resp.json()["access_token"], test_settings)
    assert claims["role"] == "admin"


def test_login_without_identity_provider(test_app, test_settings, identity_token):
    from api import deps

    unconfigured = test_settings.model_copy(update={"identity_token_secret": None})
    test_app.dependency_overrides[deps.get_settings] = lambda: unconfigured
    client = TestClient(test_app)

    resp = client.post("/auth/login", json={"id_token": identity_token("user-a@example.com")})
    assert resp.status_code == 503


# =============================================================================
# Users
# =============================================================================


def test_update_profile(api_client, auth_headers):
    resp = api_client.put("/users/me", json={"name": "Renamed"}, headers=auth_headers())
    assert resp.status_code == 200
    assert resp.json()["name"] == "Renamed"
    assert api_client.get("/users/me", headers=auth_headers()).json()["name"] == "Renamed"


def test_delete_account(api_client, auth_headers):
    resp = api_client.delete("/users/me", headers=auth_headers("user-b"))
    assert resp.status_code == 200
    assert resp.json() == {"message": "Account deleted successfully"}
    assert api_client.get("/users/me", headers=auth_headers("user-b")).status_code == 404


def test_check_email_needs_no_token(api_client):
    taken = api_client.get("/users/check-email", params={"email": "User-A@example.com"})
    assert taken.status_code == 200
    assert taken.json() == {"available": False}

    free = api_client.get("/users/check-email", params={"email": "nobody@example.com"})
    assert free.json() == {"available": True}


def test_check_email_blank(api_client):
    resp = api_client.get("/users/check-email", params={"email": " "})
    assert resp.status_code == 400
    assert resp.json()["field"] == "email"


# =============================================================================
# Workout Sessions
# =============================================================================


class TestWorkoutSessions:
    def test_create_and_list(self, api_client, auth_headers):
        today = utc_today().isoformat()
        resp = api_client.post("/workout-sessions", json={"date": today}, headers=auth_headers())
        assert resp.status_code == 201
        assert resp.json()["user_id"] == "user-a"

        listed = api_client.get("/workout-sessions", headers=auth_headers())
        assert [s["date"] for s in listed.json()] == [today]

    def test_one_session_per_date(self, api_client, auth_headers, session_id):
        resp = api_client.post(
            "/workout-sessions", json={"date": utc_today().isoformat()}, headers=auth_headers()
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid operation"

    def test_future_date_rejected(self, api_client, auth_headers):
        tomorrow = (utc_today() + timedelta(days=1)).isoformat()
        resp = api_client.post("/workout-sessions", json={"date": tomorrow}, headers=auth_headers())
        assert resp.status_code == 400
        assert resp.json()["field"] == "date"

    def test_inverted_date_range_rejected(self, api_client, auth_headers):
        resp = api_client.get(
            "/workout-sessions",
            params={"start_date": "2024-06-30", "end_date": "2024-06-01"},
            headers=auth_headers(),
        )
        assert resp.status_code == 400

    def test_get_by_date(self, api_client, auth_headers, session_id):
        today = utc_today().isoformat()
        resp = api_client.get(f"/workout-sessions/by-date/{today}", headers=auth_headers())
        assert resp.status_code == 200
        assert resp.json()["id"] == session_id

    def test_get_by_date_without_session(self, api_client, auth_headers, session_id):
        yesterday = (utc_today() - timedelta(days=1)).isoformat()
        resp = api_client.get(f"/workout-sessions/by-date/{yesterday}", headers=auth_headers())
        assert resp.status_code == 404

        today = utc_today().isoformat()
        other = api_client.get(f"/workout-sessions/by-date/{today}", headers=auth_headers("user-b"))
        assert other.status_code == 404

    def test_other_users_session_hidden(self, api_client, auth_headers, session_id):
        assert api_client.get(f"/workout-sessions/{session_id}", headers=auth_headers("user-b")).status_code == 404
        assert api_client.delete(f"/workout-sessions/{session_id}", headers=auth_headers("user-b")).status_code == 404
        assert api_client.get(f"/workout-sessions/{session_id}", headers=auth_headers()).status_code == 200

    def test_update_notes(self, api_client, auth_headers, session_id):
        resp = api_client.put(
            f"/workout-sessions/{session_id}", json={"notes": "Felt strong"}, headers=auth_headers()
        )
        assert resp.status_code == 200
        assert resp.json()["notes"] == "Felt strong"

    def test_listing_reflects_writes(self, api_client, auth_headers, session_id):
        assert len(api_client.get("/workout-sessions", headers=auth_headers()).json()) == 1

        yesterday = (utc_today() - timedelta(days=1)).isoformat()
        api_client.post("/workout-sessions", json={"date": yesterday}, headers=auth_headers())
        assert len(api_client.get("/workout-sessions", headers=auth_headers()).json()) == 2

        api_client.delete(f"/workout-sessions/{session_id}", headers=auth_headers())
        assert len(api_client.get("/workout-sessions", headers=auth_headers()).json()) == 1


# =============================================================================
# Strength Lifts
# =============================================================================


class TestStrengthLifts:
    def test_logging_flow(self, api_client, auth_headers):
        today = utc_today().isoformat()
        session = api_client.post("/workout-sessions", json={"date": today}, headers=auth_headers())
        assert session.status_code == 201
        session_id = session.json()["id"]

        first = api_client.post(
            "/strength-lifts",
            json={
                "workout_session_id": session_id,
                "exercise_type_id": BACK_SQUAT,
                "sets": 5,
                "reps": 5,
                "weight": 135.25,
            },
            headers=auth_headers(),
        )
        assert first.status_code == 201
        assert first.json()["order"] == 1

        second = api_client.post(
            "/strength-lifts",
            json={
                "workout_session_id": session_id,
                "exercise_type_id": BACK_SQUAT,
                "sets": 5,
                "reps": 5,
                "weight": 135.3,
            },
            headers=auth_headers(),
        )
        assert second.status_code == 400
        assert second.json()["field"] == "weight"

        lift_id = first.json()["id"]
        assert api_client.get(f"/strength-lifts/{lift_id}", headers=auth_headers("user-b")).status_code == 404
        assert api_client.get(f"/strength-lifts/{lift_id}", headers=auth_headers()).status_code == 200

    def test_orders_follow_creation(self, api_client, auth_headers, session_id):
        orders = []
        for exercise_type_id in (BACK_SQUAT, BENCH_PRESS):
            resp = api_client.post(
                "/strength-lifts",
                json={"workout_session_id": session_id, "exercise_type_id": exercise_type_id, "weight": 100},
                headers=auth_headers(),
            )
            orders.append(resp.json()["order"])
        assert orders == [1, 2]

        listed = api_client.get(f"/strength-lifts/session/{session_id}", headers=auth_headers())
        assert [lift["exercise_type_id"] for lift in listed.json()] == [BACK_SQUAT, BENCH_PRESS]

    @pytest.mark.parametrize(
        "field,value",
        [("sets", 0), ("sets", 51), ("reps", 501), ("duration", 1.1), ("rest_period", 0.3)],
    )
    def test_out_of_range_fields(self, api_client, auth_headers, session_id, field, value):
        resp = api_client.post(
            "/strength-lifts",
            json={"workout_session_id": session_id, "exercise_type_id": BACK_SQUAT, field: value},
            headers=auth_headers(),
        )
        assert resp.status_code == 400
        assert resp.json()["field"] == field

    def test_unknown_exercise_type(self, api_client, auth_headers, session_id):
        resp = api_client.post(
            "/strength-lifts",
            json={"workout_session_id": session_id, "exercise_type_id": 999},
            headers=auth_headers(),
        )
        assert resp.status_code == 400

    def test_other_users_session_rejected(self, api_client, auth_headers, session_id):
        resp = api_client.post(
            "/strength-lifts",
            json={"workout_session_id": session_id, "exercise_type_id": BACK_SQUAT},
            headers=auth_headers("user-b"),
        )
        assert resp.status_code == 400

    def test_update_keeps_omitted_fields(self, api_client, auth_headers, session_id):
        created = api_client.post(
            "/strength-lifts",
            json={"workout_session_id": session_id, "exercise_type_id": BACK_SQUAT, "sets": 3, "weight": 200},
            headers=auth_headers(),
        ).json()

        resp = api_client.put(
            f"/strength-lifts/{created['id']}", json={"weight": 205.5}, headers=auth_headers()
        )
        assert resp.status_code == 200
        assert resp.json()["weight"] == 205.5
        assert resp.json()["sets"] == 3

    def test_update_missing_lift(self, api_client, auth_headers):
        resp = api_client.put("/strength-lifts/missing", json={"weight": 100}, headers=auth_headers())
        assert resp.status_code == 404

    def test_personal_record(self, api_client, auth_headers, session_id):
        assert api_client.get(f"/strength-lifts/personal-record/{BACK_SQUAT}", headers=auth_headers()).status_code == 404

        for weight in (225, 315, 275):
            api_client.post(
                "/strength-lifts",
                json={"workout_session_id": session_id, "exercise_type_id": BACK_SQUAT, "weight": weight},
                headers=auth_headers(),
            )

        resp = api_client.get(f"/strength-lifts/personal-record/{BACK_SQUAT}", headers=auth_headers())
        assert resp.status_code == 200
        assert resp.json()["weight"] == 315

    def test_delete_twice(self, api_client, auth_headers, session_id):
        created = api_client.post(
            "/strength-lifts",
            json={"workout_session_id": session_id, "exercise_type_id": BACK_SQUAT},
            headers=auth_headers(),
        ).json()

        assert api_client.delete(f"/strength-lifts/{created['id']}", headers=auth_headers()).status_code == 200
        assert api_client.delete(f"/strength-lifts/{created['id']}", headers=auth_headers()).status_code == 404


# =============================================================================
# Metcon Workouts
# =============================================================================


class TestMetconWorkouts:
    def _create(self, api_client, auth_headers, session_id, **overrides):
        body = {
            "workout_session_id": session_id,
            "metcon_type_id": AMRAP,
            "rounds": 5,
            "time_cap_minutes": 20,
            "movements": [
                {"movement_type_id": PULL_UP, "reps": 10},
                {"movement_type_id": ROW, "distance": 500},
            ],
        }
        body.update(overrides)
        return api_client.post("/metcon-workouts", json=body, headers=auth_headers())

    def test_create_with_movements(self, api_client, auth_headers, session_id):
        resp = self._create(api_client, auth_headers, session_id)
        assert resp.status_code == 201
        body = resp.json()
        assert body["order"] == 1
        assert [m["order"] for m in body["movements"]] == [1, 2]

        fetched = api_client.get(f"/metcon-workouts/{body['id']}", headers=auth_headers())
        assert len(fetched.json()["movements"]) == 2

    def test_rounds_out_of_range(self, api_client, auth_headers, session_id):
        resp = self._create(api_client, auth_headers, session_id, rounds=101)
        assert resp.status_code == 400
        assert resp.json()["field"] == "rounds"

    def test_movement_measured_in_wrong_unit(self, api_client, auth_headers, session_id):
        resp = self._create(
            api_client, auth_headers, session_id, movements=[{"movement_type_id": ROW, "reps": 10}]
        )
        assert resp.status_code == 400
        assert resp.json()["field"] == "movements"

    def test_update_replaces_movements(self, api_client, auth_headers, session_id):
        created = self._create(api_client, auth_headers, session_id).json()

        resp = api_client.put(
            f"/metcon-workouts/{created['id']}",
            json={"movements": [{"movement_type_id": PULL_UP, "reps": 20}]},
            headers=auth_headers(),
        )
        assert resp.status_code == 200
        assert [m["reps"] for m in resp.json()["movements"]] == [20]
        assert resp.json()["rounds"] == 5

    def test_filter_by_metcon_type(self, api_client, auth_headers, session_id):
        self._create(api_client, auth_headers, session_id)

        resp = api_client.get("/metcon-workouts", params={"metcon_type_id": AMRAP}, headers=auth_headers())
        assert len(resp.json()) == 1
        resp = api_client.get("/metcon-workouts", params={"metcon_type_id": 2}, headers=auth_headers())
        assert resp.json() == []

    def test_session_delete_cascades(self, api_client, auth_headers, session_id):
        created = self._create(api_client, auth_headers, session_id).json()

        assert api_client.delete(f"/workout-sessions/{session_id}", headers=auth_headers()).status_code == 200
        assert api_client.get(f"/metcon-workouts/{created['id']}", headers=auth_headers()).status_code == 404
