from tests.helpers import batch_file, batch_upload


async def test_batch_upload_all_valid(client, admin):
    files = [batch_file(filename="a.png", title="A"), batch_file(filename="b.png", title="B")]

    response = await batch_upload(client, admin, files, category="menus")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert "errors" not in data
    assert sorted(doc["filename"] for doc in data["documents"]) == ["a.png", "b.png"]
    assert all(doc["category"] == "menus" for doc in data["documents"])
    assert all(doc["fileUrl"].startswith("/api/documents/download/") for doc in data["documents"])


async def test_batch_upload_partial_failure(client, admin):
    files = [
        batch_file(filename="good.png", title="Good"),
        batch_file(filename="untitled.png", title=""),
        batch_file(filename="huge.mov", title="Huge", size=501 * 1024 * 1024),
        batch_file(filename="other.png", title="Other"),
    ]

    response = await batch_upload(client, admin, files)

    assert response.status_code == 200
    data = response.json()
    assert [doc["filename"] for doc in data["documents"]] == ["good.png", "other.png"]
    assert data["errors"] == [
        "untitled.png: Missing title or filename",
        "huge.mov: File too large (501.00 MB)",
    ]

    listed = (await client.get("/api/documents")).json()["documents"]
    assert len(listed) == 2


async def test_batch_upload_entry_without_filename(client, admin):
    files = [batch_file(filename="", title="Nameless"), batch_file()]

    response = await batch_upload(client, admin, files)

    assert response.json()["errors"] == ["Unknown: Missing title or filename"]


async def test_batch_upload_all_invalid(client, admin):
    files = [batch_file(title=""), batch_file(filename="x.png", title="X", size=600 * 1024 * 1024)]

    response = await batch_upload(client, admin, files)

    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["error"].startswith("Failed to upload documents: ")
    assert "menu.png: Missing title or filename" in data["error"]

    assert (await client.get("/api/documents")).json()["documents"] == []


async def test_batch_upload_without_documents(client, admin):
    response = await batch_upload(client, admin, [])

    assert response.status_code == 400
    assert response.json()["error"] == "No documents provided"


async def test_batch_upload_without_uploader(client):
    response = await client.post("/api/documents/batch-upload", json={"documents": [batch_file()]})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing userId or userName"


async def test_batch_upload_without_file_data_still_stores_metadata(client, admin):
    response = await batch_upload(client, admin, [batch_file(fileData=None)])

    assert response.status_code == 200
    document = response.json()["documents"][0]

    response = await client.get(f"/api/documents/view/{document['id']}")
    assert response.status_code == 400
    assert response.json()["error"] == "File data not available"
