"""Tests for the web interface."""

import uuid
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from fittrack import __version__
from fittrack.web import create_app


@pytest.fixture
def client(settings, store_client):
    """Test client for an app bound to the fake store."""
    app = create_app(settings, store=store_client)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def workout(fake_store):
    """A stored workout dated today."""
    return fake_store.add(
        "workouts", name="Upper Body Strength", date=date.today().isoformat(), duration_minutes=45
    )


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        """Test health check response."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}


class TestDashboard:
    """Tests for the dashboard page."""

    def test_empty_dashboard(self, client):
        """Test the dashboard with no workouts."""
        response = client.get("/")

        assert response.status_code == 200
        assert "No workouts yet" in response.text
        assert "0h 0m" in response.text

    def test_recent_workouts_and_counts(self, client, fake_store, workout):
        """Test that recent workouts show with their exercise counts."""
        fake_store.add(
            "workout_exercises",
            workout_id=workout["id"],
            exercise_id=fake_store.exercise_id("Squats"),
        )

        response = client.get("/")

        assert "Upper Body Strength" in response.text
        assert "1 exercises" in response.text
        assert "0h 45m" in response.text
        assert f"/workouts/{workout['id']}" in response.text

    def test_recent_limit(self, client, fake_store, settings):
        """Test that only the configured number of workouts are listed."""
        for offset in range(settings.recent_limit + 2):
            day = date.today() - timedelta(days=offset)
            fake_store.add("workouts", name=f"Session {offset}", date=day.isoformat())

        response = client.get("/")

        assert f"Session {settings.recent_limit - 1}<" in response.text
        assert f"Session {settings.recent_limit}<" not in response.text

    def test_notice_toast(self, client):
        """Test that a notice query parameter shows its message."""
        response = client.get("/?notice=workout_created")
        assert "Workout created successfully!" in response.text

    def test_unknown_notice_ignored(self, client):
        """Test that unknown notices are not echoed."""
        response = client.get("/?notice=<script>")
        assert "toast-success" not in response.text

    def test_store_failure_shows_error(self, client, fake_store):
        """Test that a failed load renders an empty page with an error."""
        fake_store.fail_with = 500

        response = client.get("/")

        assert response.status_code == 200
        assert "Failed to load data" in response.text
        assert "No workouts yet" in response.text


class TestWorkoutRoutes:
    """Tests for creating, viewing and editing workouts."""

    def test_create_workout(self, client, fake_store):
        """Test the new-workout form."""
        response = client.post(
            "/workouts",
            data={"name": "  Leg Day ", "date": "2024-01-08", "duration_minutes": "50"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/?notice=workout_created"
        stored = fake_store.tables["workouts"][0]
        assert stored["name"] == "Leg Day"
        assert stored["date"] == "2024-01-08"
        assert stored["duration_minutes"] == 50

    def test_create_defaults(self, client, fake_store):
        """Test the default date and duration."""
        client.post("/workouts", data={"name": "Quick"}, follow_redirects=False)

        stored = fake_store.tables["workouts"][0]
        assert stored["date"] == date.today().isoformat()
        assert stored["duration_minutes"] == 60

    def test_create_blank_name(self, client, fake_store):
        """Test that a whitespace-only name is refused."""
        response = client.post("/workouts", data={"name": "   "}, follow_redirects=False)

        assert response.headers["location"] == "/?error=invalid_input"
        assert fake_store.tables["workouts"] == []

    def test_create_invalid_date(self, client, fake_store):
        """Test that a malformed date is refused."""
        response = client.post(
            "/workouts", data={"name": "Leg Day", "date": "08/01/2024"}, follow_redirects=False
        )

        assert response.headers["location"] == "/?error=invalid_input"
        assert fake_store.tables["workouts"] == []

    def test_create_negative_duration(self, client):
        """Test that a negative duration fails validation."""
        response = client.post(
            "/workouts", data={"name": "Leg Day", "duration_minutes": "-5"}
        )
        assert response.status_code == 422

    def test_create_failure(self, client, fake_store):
        """Test the redirect when the store rejects the insert."""
        fake_store.fail_with = 500

        response = client.post("/workouts", data={"name": "Leg Day"}, follow_redirects=False)

        assert response.headers["location"] == "/?error=create_failed"

    def test_detail(self, client, fake_store, workout):
        """Test the workout page lists exercises in order."""
        for name in ("Squats", "Plank"):
            client.post(
                f"/workouts/{workout['id']}/exercises",
                data={"exercise_id": fake_store.exercise_id(name), "sets": "3", "reps": "12"},
            )

        response = client.get(f"/workouts/{workout['id']}")

        assert response.status_code == 200
        assert "Upper Body Strength" in response.text
        assert response.text.index("<h3>Squats</h3>") < response.text.index("<h3>Plank</h3>")

    def test_detail_search(self, client, workout):
        """Test filtering the exercise selector."""
        response = client.get(f"/workouts/{workout['id']}", params={"q": "chest"})

        assert "Bench Press" in response.text
        assert "Squats" not in response.text

    def test_detail_not_found(self, client):
        """Test an unknown workout."""
        response = client.get("/workouts/missing")

        assert response.status_code == 404
        assert "Workout not found" in response.text

    def test_detail_unknown_uuid(self, client):
        """Test a well-formed ID with no matching workout."""
        response = client.get(f"/workouts/{uuid.uuid4()}")

        assert response.status_code == 404
        assert "Workout not found" in response.text

    def test_detail_store_failure(self, client, fake_store):
        """Test that a failed load returns to the dashboard."""
        fake_store.fail_with = 500

        response = client.get(f"/workouts/{uuid.uuid4()}", follow_redirects=False)

        assert response.headers["location"] == "/?error=load_failed"

    def test_add_exercise(self, client, fake_store, workout):
        """Test appending an exercise."""
        response = client.post(
            f"/workouts/{workout['id']}/exercises",
            data={
                "exercise_id": fake_store.exercise_id("Bench Press"),
                "sets": "4",
                "reps": "8",
                "weight": "135",
            },
            follow_redirects=False,
        )

        assert response.headers["location"] == f"/workouts/{workout['id']}?notice=exercise_added"
        row = fake_store.tables["workout_exercises"][0]
        assert row["order_index"] == 0
        assert row["sets"] == 4
        assert row["weight"] == 135

    def test_add_exercise_failure(self, client, fake_store):
        """Test the redirect when the append fails."""
        response = client.post(
            "/workouts/missing/exercises",
            data={"exercise_id": fake_store.exercise_id("Plank")},
            follow_redirects=False,
        )
        assert response.headers["location"] == "/workouts/missing?error=add_failed"

    def test_remove_exercise(self, client, fake_store, workout):
        """Test removing a logged exercise."""
        item = fake_store.add(
            "workout_exercises",
            workout_id=workout["id"],
            exercise_id=fake_store.exercise_id("Plank"),
        )

        response = client.post(
            f"/workouts/{workout['id']}/exercises/{item['id']}/delete", follow_redirects=False
        )

        assert response.headers["location"] == (
            f"/workouts/{workout['id']}?notice=exercise_removed"
        )
        assert fake_store.tables["workout_exercises"] == []

    def test_delete_workout(self, client, fake_store, workout):
        """Test deleting a workout."""
        response = client.post(f"/workouts/{workout['id']}/delete", follow_redirects=False)

        assert response.headers["location"] == "/?notice=workout_deleted"
        assert fake_store.tables["workouts"] == []
        assert len(fake_store.tables["exercises"]) == 3

    def test_delete_failure(self, client, fake_store, workout):
        """Test the redirect when the delete fails."""
        fake_store.fail_with = 500

        response = client.post(f"/workouts/{workout['id']}/delete", follow_redirects=False)

        assert response.headers["location"] == f"/workouts/{workout['id']}?error=delete_failed"


class TestExerciseLibrary:
    """Tests for the exercise library page."""

    def test_lists_all(self, client):
        """Test that every exercise and category is shown."""
        response = client.get("/exercises")

        assert response.status_code == 200
        for name in ("Squats", "Bench Press", "Plank", "Strength", "Core"):
            assert name in response.text

    def test_category_filter(self, client, fake_store):
        """Test restricting the library to one category."""
        core_id = next(
            row["id"] for row in fake_store.tables["exercise_categories"] if row["name"] == "Core"
        )

        response = client.get("/exercises", params={"category": core_id})

        assert "Plank" in response.text
        assert "Squats" not in response.text

    def test_search(self, client):
        """Test searching by muscle group."""
        response = client.get("/exercises", params={"q": "glutes"})

        assert "Squats" in response.text
        assert "Bench Press" not in response.text


class TestProgressRoutes:
    """Tests for the progress page and form."""

    def test_empty(self, client):
        """Test the page with no entries."""
        response = client.get("/progress")

        assert response.status_code == 200
        assert "No progress data yet" in response.text

    def test_changes_shown(self, client, fake_store):
        """Test latest values and changes."""
        fake_store.add("progress_metrics", date="2024-01-01", weight=180, body_fat_percentage=20)
        fake_store.add("progress_metrics", date="2024-01-08", weight=178, body_fat_percentage=19.5)

        response = client.get("/progress")

        assert "178 lbs" in response.text
        assert "-2.0 lbs (-1.1%)" in response.text
        assert "-0.5% (-2.5%)" in response.text

    def test_log_progress(self, client, fake_store):
        """Test recording an entry with a blank field."""
        response = client.post(
            "/progress",
            data={"date": "2024-01-08", "weight": "178.5", "body_fat_percentage": ""},
            follow_redirects=False,
        )

        assert response.headers["location"] == "/progress?notice=progress_logged"
        stored = fake_store.tables["progress_metrics"][0]
        assert stored["weight"] == 178.5
        assert stored["body_fat_percentage"] is None

    def test_log_invalid_number(self, client, fake_store):
        """Test that non-numeric input is refused."""
        response = client.post(
            "/progress", data={"date": "2024-01-08", "weight": "heavy"}, follow_redirects=False
        )

        assert response.headers["location"] == "/progress?error=invalid_input"
        assert fake_store.tables["progress_metrics"] == []

    def test_log_failure(self, client, fake_store):
        """Test the redirect when saving fails."""
        fake_store.fail_with = 500

        response = client.post(
            "/progress", data={"date": "2024-01-08", "weight": "178"}, follow_redirects=False
        )

        assert response.headers["location"] == "/progress?error=save_failed"


class TestApi:
    """Tests for the JSON endpoints."""

    def test_stats(self, client, workout, fake_store):
        """Test the stats endpoint."""
        fake_store.add("workouts", name="Old", date="2020-01-01", duration_minutes=30)

        data = client.get("/api/stats").json()

        assert data["total_workouts"] == 2
        assert data["this_week_workouts"] == 1
        assert data["total_minutes"] == 75
        assert data["avg_duration"] == 38
        assert data["total_time"] == "1h 15m"

    def test_progress_changes(self, client, fake_store):
        """Test the changes endpoint."""
        fake_store.add("progress_metrics", date="2024-01-01", weight=180)
        fake_store.add("progress_metrics", date="2024-01-08", weight=178)

        data = client.get("/api/progress/changes").json()

        assert data["weight"] == {
            "field": "weight",
            "change": "-2.0",
            "percent_change": "-1.1",
            "is_positive": False,
        }
        assert data["body_fat_percentage"] is None

    def test_store_failure(self, client, fake_store):
        """Test that store failures map to a gateway error."""
        fake_store.fail_with = 503

        response = client.get("/api/stats")

        assert response.status_code == 502
        assert "store unavailable" in response.json()["error"]
