import time
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from cafedocs.db.repositories.activity_repository import ActivityLogRepository
from cafedocs.domains.activity.entities import ActivityLog
from cafedocs.domains.activity.services import ActivityService, local_period_starts
from tests.helpers import batch_file, batch_upload


def entry(user_id, action, timestamp, name="Ann"):
    log = ActivityLog.create_entry(user_id=user_id, user_name=name, action=action)
    log.timestamp = timestamp
    return log


async def test_stats_count_uploads_per_period(session, admin):
    now = datetime(2026, 10, 17, 12, tzinfo=timezone.utc)
    today, month_start = local_period_starts(now)
    repository = ActivityLogRepository(session)
    user_id = uuid.UUID(admin["id"])

    await repository.create(entry(user_id, "upload", today + timedelta(hours=1)))
    await repository.create(entry(user_id, "upload", month_start + timedelta(hours=1)))
    await repository.create(entry(user_id, "upload", month_start - timedelta(days=1)))
    await repository.create(entry(user_id, "download", today + timedelta(hours=2)))

    stats = await ActivityService(session).dashboard_stats(now=now)

    assert stats.total_uploads == 3
    assert stats.month_uploads == 2
    assert stats.today_uploads == 1
    assert stats.total_uploads >= stats.month_uploads >= stats.today_uploads
    assert stats.active_employees == 1


def test_local_period_starts_order():
    today, month_start = local_period_starts(datetime(2026, 10, 17, 12, tzinfo=timezone.utc))

    assert month_start <= today
    assert today.tzinfo is None


@pytest.fixture
def central_european_time(monkeypatch):
    monkeypatch.setenv("TZ", "CET-1CEST,M3.5.0,M10.5.0/3")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
def test_period_starts_across_daylight_saving_change(central_european_time):
    # Summer time ended on 2026-10-25; the month began at UTC+2, today at UTC+1
    today, month_start = local_period_starts(datetime(2026, 10, 26, 12, tzinfo=timezone.utc))

    assert today == datetime(2026, 10, 25, 23)
    assert month_start == datetime(2026, 9, 30, 22)


async def test_stats_endpoint(client, admin, employee):
    await batch_upload(client, admin, [batch_file(content=b"12345"), batch_file(filename="b.png", content=b"123")])
    for _ in range(2):
        await client.post(
            "/api/logs/activity",
            json={"userId": admin["id"], "userName": admin["name"], "action": "upload", "documentName": "2 documents"}
        )

    response = await client.get("/api/dashboard/stats")

    assert response.status_code == 200
    stats = response.json()["stats"]
    assert stats == {
        "totalUploads": 2,
        "todayUploads": 2,
        "monthUploads": 2,
        "totalSize": 8,
        "activeEmployees": 2,
    }


async def test_log_activity_requires_fields(client, admin):
    response = await client.post("/api/logs/activity", json={"userId": admin["id"], "action": "upload"})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing required fields"


async def test_log_activity_rejects_bad_ids(client, admin):
    response = await client.post(
        "/api/logs/activity",
        json={"userId": "abc", "userName": "Ann", "action": "view"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid userId"

    response = await client.post(
        "/api/logs/activity",
        json={"userId": admin["id"], "userName": "Ann", "action": "view", "documentId": "abc"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid documentId"


async def test_recent_activity_newest_first(client, session, admin):
    repository = ActivityLogRepository(session)
    start = datetime(2026, 10, 1, 9)
    for minutes in range(5):
        await repository.create(
            entry(uuid.UUID(admin["id"]), f"view-{minutes}", start + timedelta(minutes=minutes))
        )

    response = await client.get("/api/logs/activity", params={"limit": 3})

    assert response.status_code == 200
    logs = response.json()["logs"]
    assert [log["action"] for log in logs] == ["view-4", "view-3", "view-2"]
    assert logs[0]["timestamp"] == "2026-10-01T09:04:00Z"
    assert logs[0]["userName"] == "Ann"


async def test_recent_activity_limit_bounds(client):
    response = await client.get("/api/logs/activity", params={"limit": 0})

    assert response.status_code == 400
