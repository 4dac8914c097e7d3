import pytest
from fastapi.testclient import TestClient

from planner_api import repositories
from planner_api.main import app

from factories import make_record

HEADERS = {"X-User-Id": "Alice@Example.com", "X-Backend-Token": "test-secret"}


class FakeStore:
    def __init__(self):
        self.records = {}
        self.list_calls = []
        self.created = []
        self.updates = []

    async def list_items(self, user_id, start_utc=None, end_utc=None, is_task=None, include_archived=False):
        self.list_calls.append(
            {"user_id": user_id, "start_utc": start_utc, "end_utc": end_utc, "is_task": is_task}
        )
        return [record for record in self.records.values() if is_task is None or record["is_task"] == is_task]

    async def get_item(self, user_id, item_id):
        record = self.records.get(item_id)
        if not record or record["user_id"] != user_id:
            return {}
        return dict(record)

    async def create_item(self, user_id, payload):
        self.created.append((user_id, payload))
        record = make_record("new", payload["start_datetime"], payload["end_datetime"], title=payload["event_name"])
        record["user_id"] = user_id
        return record

    async def update_item(self, user_id, item_id, patch):
        self.updates.append(patch)
        record = dict(self.records[item_id])
        record.update(patch)
        return record

    async def archive_item(self, user_id, item_id):
        return await self.update_item(user_id, item_id, {"archived": True})

    async def set_complete(self, user_id, item_id, complete):
        return await self.update_item(user_id, item_id, {"complete": complete})

    async def delete_item(self, user_id, item_id):
        return self.records.pop(item_id, None) is not None


@pytest.fixture
def store(api_env, monkeypatch):
    fake = FakeStore()
    for name in ("list_items", "get_item", "create_item", "update_item", "archive_item", "set_complete", "delete_item"):
        monkeypatch.setattr(repositories, name, getattr(fake, name))
    return fake


@pytest.fixture
def client(store):
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_auth_is_required(client):
    assert client.get("/v1/items").status_code == 401
    assert client.get("/v1/items", headers={**HEADERS, "X-Backend-Token": "wrong"}).status_code == 401
    assert client.get("/v1/items", headers={**HEADERS, "X-User-Id": "mallory@example.com"}).status_code == 403


def test_create_encodes_wall_clock_with_client_offset(client, store):
    response = client.post(
        "/v1/items",
        headers=HEADERS,
        json={
            "title": "Standup",
            "start_date": "2024-01-10",
            "start_time": "09:30",
            "end_date": "2024-01-10",
            "end_time": "10:00",
            "importance": 2,
            "utc_offset_minutes": 330,
        },
    )
    assert response.status_code == 200
    user_id, payload = store.created[0]
    assert user_id == "alice@example.com"
    assert payload["start_datetime"] == "2024-01-10T09:30:00+05:30"
    assert payload["end_datetime"] == "2024-01-10T10:00:00+05:30"
    assert payload["importance"] == 2
    assert response.json()["event_name"] == "Standup"


@pytest.mark.parametrize(
    "overrides",
    [
        {"end_time": "09:00"},
        {"start_time": "25:00"},
        {"start_date": "2024-13-01"},
    ],
)
def test_create_rejects_bad_input(client, store, overrides):
    body = {
        "title": "Standup",
        "start_date": "2024-01-10",
        "start_time": "09:30",
        "end_date": "2024-01-10",
        "end_time": "10:00",
        "utc_offset_minutes": 0,
    }
    body.update(overrides)
    assert client.post("/v1/items", headers=HEADERS, json=body).status_code == 400
    assert store.created == []


def test_missing_item_is_404(client):
    assert client.get("/v1/items/nope", headers=HEADERS).status_code == 404
    assert client.post("/v1/items/nope/archive", headers=HEADERS).status_code == 404
    assert client.delete("/v1/items/nope", headers=HEADERS).status_code == 404


def test_form_prefill_decodes_in_viewer_zone(client, store):
    store.records["a"] = make_record(
        "a", "2024-01-10T09:30:00+05:30", "2024-01-10T10:45:00+05:30", title="Review", importance=2
    )
    response = client.get("/v1/items/a/form", headers=HEADERS, params={"utc_offset_minutes": 330})
    assert response.status_code == 200
    form = response.json()
    assert (form["start_date"], form["start_time"]) == ("2024-01-10", "09:30")
    assert (form["end_date"], form["end_time"]) == ("2024-01-10", "10:45")
    assert form["importance"] == "MEDIUM"
    assert form["title"] == "Review"


def test_patch_fills_missing_half_from_stored_value(client, store):
    store.records["a"] = make_record("a", "2024-01-10T09:00:00+00:00", "2024-01-10T17:00:00+00:00")
    response = client.patch(
        "/v1/items/a",
        headers=HEADERS,
        json={"start_time": "11:15", "title": "Renamed", "utc_offset_minutes": 0},
    )
    assert response.status_code == 200
    patch = store.updates[-1]
    assert patch["start_datetime"] == "2024-01-10T11:15:00+00:00"
    assert patch["event_name"] == "Renamed"
    assert "end_datetime" not in patch


def test_patch_rejects_start_after_end(client, store):
    store.records["a"] = make_record("a", "2024-01-10T09:00:00+00:00", "2024-01-10T10:00:00+00:00")
    response = client.patch(
        "/v1/items/a", headers=HEADERS, json={"start_time": "12:00", "utc_offset_minutes": 0}
    )
    assert response.status_code == 400
    assert store.updates == []


def test_complete_and_archive(client, store):
    store.records["a"] = make_record("a", "2024-01-10T09:00:00+00:00", "2024-01-10T10:00:00+00:00")
    assert client.post("/v1/items/a/complete", headers=HEADERS, json={"complete": True}).json()["complete"] is True
    assert client.post("/v1/items/a/archive", headers=HEADERS).json()["archived"] is True


def test_month_view(client, store):
    for hour in range(8, 13):
        store.records[str(hour)] = make_record(
            str(hour), f"2024-01-10T{hour:02d}:00:00+00:00", f"2024-01-10T{hour:02d}:30:00+00:00"
        )
    response = client.get(
        "/v1/calendar/month", headers=HEADERS, params={"month": "2024-01", "utc_offset_minutes": 0}
    )
    assert response.status_code == 200
    view = response.json()
    assert view["label"] == "January 2024"
    assert view["weekday_labels"][0] == "Sun"
    assert len(view["weeks"]) == 5
    cells = {cell["date"]: cell for week in view["weeks"] for cell in week}
    assert cells["2024-01-10"]["total"] == 5
    assert len(cells["2024-01-10"]["items"]) == 3
    assert cells["2024-01-10"]["overflow"] == 2
    assert store.list_calls[-1]["start_utc"] == "2023-12-31T00:00:00+00:00"
    assert store.list_calls[-1]["end_utc"] == "2024-02-04T00:00:00+00:00"


@pytest.mark.parametrize("month", ["2024-13", "2024-1", "January"])
def test_month_view_rejects_bad_month(client, month):
    assert client.get("/v1/calendar/month", headers=HEADERS, params={"month": month}).status_code == 400


def test_week_view_positions_items(client, store):
    store.records["a"] = make_record("a", "2024-01-10T09:00:00+00:00", "2024-01-10T10:30:00+00:00")
    response = client.get(
        "/v1/calendar/week", headers=HEADERS, params={"anchor": "2024-01-10", "utc_offset_minutes": 0}
    )
    assert response.status_code == 200
    view = response.json()
    assert view["label"] == "January 7-13, 2024"
    assert [day["date"] for day in view["days"]][0] == "2024-01-07"
    assert view["hour_labels"][0] == "12 AM"
    wednesday = view["days"][3]
    assert wednesday["date"] == "2024-01-10"
    item = wednesday["items"][0]
    assert (item["top_px"], item["height_px"]) == (576.0, 96.0)
    assert all(not day["items"] for day in view["days"] if day["date"] != "2024-01-10")


def test_task_week_uses_rolling_window(client, store):
    store.records["t"] = make_record(
        "t", "2024-01-18T09:00:00+00:00", "2024-01-18T09:30:00+00:00", is_task=True
    )
    response = client.get(
        "/v1/tasks/week",
        headers=HEADERS,
        params={"anchor": "2024-01-10", "offset": 1, "utc_offset_minutes": 0},
    )
    assert response.status_code == 200
    view = response.json()
    assert view["offset"] == 1
    assert view["days"][0]["date"] == "2024-01-17"
    assert view["days"][1]["weekday_name"] == "Thursday"
    assert view["days"][1]["month_day"] == "Jan 18"
    assert [item["id"] for item in view["days"][1]["items"]] == ["t"]
    assert store.list_calls[-1]["is_task"] is True
