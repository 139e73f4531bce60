import pytest

from cafedocs.client import (
    AdminDashboard, ApiError, CafeDocsClient, EmployeeDashboard, PendingFile, SessionStore,
    login, logout, open_dashboard, reset_password, restore_session
)
from tests.helpers import ADMIN_EMAIL, ADMIN_PASSWORD, create_employee


@pytest.fixture
async def api(transport):
    async with CafeDocsClient(base_url="http://test", transport=transport) as api:
        yield api


@pytest.fixture
def store(tmp_path):
    return SessionStore(tmp_path / "session.json")


async def sign_in(api, store, email=ADMIN_EMAIL, password=ADMIN_PASSWORD):
    user = await login(api, store, email, password)
    return open_dashboard(api, user)


async def test_admin_dashboard_loads_everything(api, store):
    dashboard = await sign_in(api, store)

    await dashboard.load()

    assert isinstance(dashboard, AdminDashboard)
    assert [e["email"] for e in dashboard.employees] == [ADMIN_EMAIL]
    assert dashboard.active_employee_count == 1
    assert dashboard.stats["totalUploads"] == 0
    assert dashboard.documents == []


async def test_submit_all_uploads_queue_and_logs_activity(api, store):
    dashboard = await sign_in(api, store)
    await dashboard.load()

    dashboard.add_pending_file(PendingFile("menu.png", b"menu", title="Menu"))
    roster = dashboard.add_pending_file(PendingFile("roster.txt", b"names"))
    dashboard.update_pending_file(roster.id, title="Roster", description="Week 42")

    result = await dashboard.submit_all(category="staff")

    assert result.warnings == []
    assert sorted(doc["filename"] for doc in result.documents) == ["menu.png", "roster.txt"]
    assert dashboard.pending_files == []
    assert len(dashboard.documents) == 2

    roster_doc = next(doc for doc in dashboard.documents if doc["filename"] == "roster.txt")
    assert roster_doc["fileType"] == "text/plain"
    assert roster_doc["description"] == "Week 42"
    assert await api.download_document(roster_doc["id"]) == b"names"

    logs = await api.get_activity_logs()
    assert [(log["action"], log["documentName"]) for log in logs] == [("upload", "2 documents")]

    stats = await dashboard.refresh_stats()
    assert stats["totalUploads"] == 1
    assert stats["totalSize"] == 9


async def test_submit_all_reports_partial_failures(api, store):
    dashboard = await sign_in(api, store)
    oversized = PendingFile("big.bin", b"x", title="Big")
    oversized_payload = oversized.to_payload

    def huge_payload():
        payload = oversized_payload()
        payload["size"] = 501 * 1024 * 1024
        return payload

    oversized.to_payload = huge_payload
    dashboard.add_pending_file(PendingFile("ok.png", b"ok", title="Ok"))
    dashboard.add_pending_file(oversized)

    result = await dashboard.submit_all()

    assert [doc["filename"] for doc in result.documents] == ["ok.png"]
    assert result.warnings == ["big.bin: File too large (501.00 MB)"]


async def test_submit_all_validates_queue(api, store):
    dashboard = await sign_in(api, store)

    with pytest.raises(ValueError, match="at least one file"):
        await dashboard.submit_all()

    pending = dashboard.add_pending_file(PendingFile("menu.png", b"menu"))
    with pytest.raises(ValueError, match="title"):
        await dashboard.submit_all()

    dashboard.remove_pending_file(pending.id)
    assert dashboard.pending_files == []


async def test_update_pending_file_only_touches_text_fields(api, store):
    dashboard = await sign_in(api, store)
    pending = dashboard.add_pending_file(PendingFile("menu.png", b"menu"))

    with pytest.raises(AttributeError):
        dashboard.update_pending_file(pending.id, filename="other.png")


async def test_admin_deletes_and_downloads(api, store, tmp_path):
    dashboard = await sign_in(api, store)
    dashboard.add_pending_file(PendingFile("menu.png", b"menu-bytes", title="Menu"))
    await dashboard.submit_all()
    document = dashboard.documents[0]

    target = await dashboard.download_document(document, tmp_path)
    assert target.read_bytes() == b"menu-bytes"

    await dashboard.delete_document(document["id"])
    assert dashboard.documents == []
    with pytest.raises(ApiError) as exc_info:
        await api.get_document(document["id"])
    assert exc_info.value.status_code == 404


async def test_admin_manages_employees(api, store):
    dashboard = await sign_in(api, store)
    await dashboard.load()

    employee = await dashboard.add_employee("cook@cafe.com", "Cook", "omelette")
    assert dashboard.employees[0]["id"] == employee["id"]

    await dashboard.set_employee_active(employee["id"], False)
    assert dashboard.active_employee_count == 1

    renamed = await dashboard.rename_employee(employee["id"], "Head Cook")
    assert renamed["name"] == "Head Cook"
    assert renamed["isActive"] is False

    await dashboard.delete_employee(employee["id"])
    assert [e["email"] for e in dashboard.employees] == [ADMIN_EMAIL]


async def test_employee_dashboard_is_scoped(client, api, store):
    await create_employee(client)
    await create_employee(client, email="waiter@cafe.com", name="Waiter Will")

    waiter = await sign_in(api, store, "waiter@cafe.com", "latte123")
    waiter.add_pending_file(PendingFile("tips.txt", b"tips", title="Tips"))
    await waiter.submit_all()

    barista = await sign_in(api, store, "barista@cafe.com", "latte123")
    assert isinstance(barista, EmployeeDashboard)
    barista.add_pending_file(PendingFile("beans.txt", b"beans", title="Beans"))
    await barista.submit_all()

    await barista.load()
    assert [doc["filename"] for doc in barista.documents] == ["beans.txt"]

    with pytest.raises(ApiError) as exc_info:
        await barista.delete_document(barista.documents[0]["id"])
    assert exc_info.value.status_code == 403
    assert exc_info.value.message == "Unauthorized"


async def test_employee_cannot_open_admin_dashboard(api, store, client):
    await create_employee(client)
    user = await login(api, store, "barista@cafe.com", "latte123")

    with pytest.raises(PermissionError):
        AdminDashboard(api, user)


async def test_session_survives_restart(api, store, transport):
    user = await login(api, store, ADMIN_EMAIL, ADMIN_PASSWORD)
    assert store.load()["user"] == user

    async with CafeDocsClient(base_url="http://test", transport=transport) as fresh:
        restored = await restore_session(fresh, store)
        assert restored["id"] == user["id"]

        await logout(fresh, store)

    assert store.load() is None


async def test_restore_session_discards_bad_token(api, store):
    store.save({"id": "x", "email": "x@cafe.com", "name": "X", "role": "admin"}, "garbage")

    assert await restore_session(api, store) is None
    assert store.load() is None
    assert api.token is None


def test_session_store_ignores_corrupt_file(store):
    store.path.write_text("{not json", encoding="utf-8")

    assert store.load() is None


async def test_login_with_bad_password(api, store):
    with pytest.raises(ApiError) as exc_info:
        await login(api, store, ADMIN_EMAIL, "wrong")

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Invalid credentials"
    assert store.load() is None


async def test_reset_password_validates_locally(api):
    with pytest.raises(ValueError, match="All fields are required"):
        await reset_password(api, ADMIN_EMAIL, "", "newpass")

    with pytest.raises(ValueError, match="at least 6"):
        await reset_password(api, ADMIN_EMAIL, ADMIN_PASSWORD, "abc")

    message = await reset_password(api, ADMIN_EMAIL, ADMIN_PASSWORD, "espresso")
    assert message == "Password reset successfully"

    with pytest.raises(ApiError):
        await api.login(ADMIN_EMAIL, ADMIN_PASSWORD)


def test_pending_file_payload(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_bytes(b"hi")

    pending = PendingFile.from_path(path, title="Notes")

    payload = pending.to_payload()
    assert payload["filename"] == "notes.txt"
    assert payload["fileType"] == "text/plain"
    assert payload["size"] == 2
    assert payload["fileData"] == "data:text/plain;base64,aGk="
