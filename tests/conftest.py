"""Pytest configuration and fixtures."""

import json
import re
import uuid
from datetime import date, datetime, timezone

import httpx
import pytest

from fittrack.config import Settings
from fittrack.models.progress import ProgressMetric
from fittrack.store import StoreClient

EMBED_PATTERN = re.compile(r"^(\w+):(\w+)\(([^)]*)\)$")

# Columns typed uuid in the schema
UUID_COLUMNS = {"id", "workout_id", "exercise_id", "category_id", "user_id"}

TABLE_DEFAULTS = {
    "exercise_categories": {"description": None},
    "exercises": {
        "description": None,
        "category_id": None,
        "muscle_groups": [],
        "difficulty": "intermediate",
        "instructions": None,
    },
    "workouts": {"user_id": None, "duration_minutes": 0, "notes": None},
    "workout_exercises": {
        "sets": 0,
        "reps": 0,
        "weight": 0,
        "duration_seconds": 0,
        "order_index": 0,
        "notes": None,
    },
    "progress_metrics": {
        "user_id": None,
        "weight": None,
        "body_fat_percentage": None,
        "measurements": {},
        "notes": None,
    },
}


class FakeStore:
    """In-memory stand-in for the store's REST interface.

    Understands the subset of the query dialect the client uses: ``eq.``
    filters, ``order``, ``limit``, column lists with one level of embedded
    resources, inserts, deletes (with the workouts -> workout_exercises
    cascade) and the ``append_workout_exercise`` function. Filters on uuid
    columns are rejected with 400 when the value is not a UUID, as the real
    store does.
    """

    def __init__(self):
        self.tables: dict[str, list[dict]] = {name: [] for name in TABLE_DEFAULTS}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def add(self, table: str, **values) -> dict:
        row = self._with_defaults(table, values)
        self.tables[table].append(row)
        return row

    def exercise_id(self, name: str) -> str:
        """Look up a seeded exercise's ID by name."""
        return next(row["id"] for row in self.tables["exercises"] if row["name"] == name)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"message": "store unavailable"})

        path = request.url.path.removeprefix("/rest/v1/")
        bad_id = self._invalid_uuid(request)
        if bad_id is not None:
            return httpx.Response(
                400, json={"message": f'invalid input syntax for type uuid: "{bad_id}"'}
            )
        if path.startswith("rpc/"):
            return self._rpc(path.removeprefix("rpc/"), json.loads(request.content))
        if path not in self.tables:
            return httpx.Response(404, json={"message": f"relation {path} does not exist"})

        if request.method == "GET":
            return httpx.Response(200, json=self._select(path, request.url.params))
        if request.method == "POST":
            rows = [self.add(path, **row) for row in json.loads(request.content)]
            return httpx.Response(201, json=rows)
        if request.method == "DELETE":
            self._delete(path, request.url.params)
            return httpx.Response(204)
        return httpx.Response(405, json={"message": "method not allowed"})

    def _invalid_uuid(self, request: httpx.Request) -> str | None:
        if request.method == "POST" and "/rpc/" in request.url.path:
            params = json.loads(request.content)
            values = [v for k, v in params.items() if k.endswith("_id")]
        else:
            values = [
                v.removeprefix("eq.")
                for k, v in request.url.params.multi_items()
                if k in UUID_COLUMNS
            ]
        for value in values:
            try:
                uuid.UUID(str(value))
            except ValueError:
                return value
        return None

    def _with_defaults(self, table: str, values: dict) -> dict:
        row = {"id": str(uuid.uuid4())}
        row.update(TABLE_DEFAULTS[table])
        if table in ("workouts", "progress_metrics"):
            row["date"] = date.today().isoformat()
        if table != "workout_exercises":
            row["created_at"] = datetime.now(timezone.utc).isoformat()
        row.update({k: v for k, v in values.items() if v is not None or k not in row})
        return row

    def _matches(self, row: dict, params: httpx.QueryParams) -> bool:
        for key, value in params.multi_items():
            if key in ("select", "order", "limit"):
                continue
            if not value.startswith("eq."):
                raise AssertionError(f"unsupported filter {key}={value}")
            if str(row.get(key)) != value[3:]:
                return False
        return True

    def _project(self, row: dict, columns: str) -> dict:
        result = {}
        for column in columns.split(","):
            embed = EMBED_PATTERN.match(column)
            if column == "*":
                result.update(row)
            elif embed:
                alias, table, embed_columns = embed.groups()
                target = next(
                    (r for r in self.tables[table] if r["id"] == row.get(f"{alias}_id")),
                    None,
                )
                result[alias] = self._project(target, embed_columns) if target else None
            else:
                result[column] = row.get(column)
        return result

    def _select(self, table: str, params: httpx.QueryParams) -> list[dict]:
        rows = [row for row in self.tables[table] if self._matches(row, params)]
        if "order" in params:
            column, direction = params["order"].split(".")
            rows.sort(key=lambda r: r[column], reverse=direction == "desc")
        if "limit" in params:
            rows = rows[: int(params["limit"])]
        return [self._project(row, params.get("select", "*")) for row in rows]

    def _delete(self, table: str, params: httpx.QueryParams) -> None:
        removed = [row for row in self.tables[table] if self._matches(row, params)]
        self.tables[table] = [row for row in self.tables[table] if row not in removed]
        if table == "workouts":
            removed_ids = {row["id"] for row in removed}
            self.tables["workout_exercises"] = [
                row
                for row in self.tables["workout_exercises"]
                if row["workout_id"] not in removed_ids
            ]

    def _rpc(self, function: str, params: dict) -> httpx.Response:
        if function != "append_workout_exercise":
            return httpx.Response(404, json={"message": f"function {function} not found"})
        workout_id = params["p_workout_id"]
        if not any(w["id"] == workout_id for w in self.tables["workouts"]):
            return httpx.Response(400, json={"message": f"workout {workout_id} not found"})
        order_index = sum(
            1 for row in self.tables["workout_exercises"] if row["workout_id"] == workout_id
        )
        row = self.add(
            "workout_exercises",
            workout_id=workout_id,
            exercise_id=params["p_exercise_id"],
            sets=params.get("p_sets", 0),
            reps=params.get("p_reps", 0),
            weight=params.get("p_weight", 0),
            duration_seconds=params.get("p_duration_seconds", 0),
            order_index=order_index,
            notes=params.get("p_notes"),
        )
        return httpx.Response(200, json=row)


@pytest.fixture
def settings():
    """Settings pointing at a fake store."""
    return Settings(store_url="https://store.test", store_key="test-key")


@pytest.fixture
def fake_store():
    """A fake store seeded with two categories and three exercises."""
    store = FakeStore()
    strength = store.add("exercise_categories", name="Strength")
    core = store.add("exercise_categories", name="Core")
    store.add(
        "exercises",
        name="Squats",
        category_id=strength["id"],
        muscle_groups=["Quadriceps", "Glutes", "Hamstrings"],
        difficulty="beginner",
    )
    store.add(
        "exercises",
        name="Bench Press",
        description="Classic upper body strength exercise",
        category_id=strength["id"],
        muscle_groups=["Chest", "Triceps", "Shoulders"],
        difficulty="intermediate",
    )
    store.add(
        "exercises",
        name="Plank",
        category_id=core["id"],
        muscle_groups=["Core", "Shoulders", "Back"],
        difficulty="beginner",
    )
    return store


@pytest.fixture
def store_client(settings, fake_store):
    """A store client wired to the fake store."""
    return StoreClient(settings, transport=fake_store.transport)


@pytest.fixture
def sample_metrics():
    """Two weekly weigh-ins, oldest first."""
    return [
        ProgressMetric(id="m1", date=date(2024, 1, 1), weight=180, body_fat_percentage=20.0),
        ProgressMetric(id="m2", date=date(2024, 1, 8), weight=178, body_fat_percentage=19.5),
    ]
