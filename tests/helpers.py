import base64

ADMIN_EMAIL = "admin@cafe.com"
ADMIN_PASSWORD = "admin123"


async def create_employee(client, email="barista@cafe.com", name="Barista Bob", password="latte123"):
    """Add an employee as the admin would and sign them in"""
    response = await client.post("/api/employees", json={"email": email, "name": name, "password": password})
    assert response.status_code == 200, response.text
    employee = response.json()["employee"]

    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return employee, response.json()["user"]


def encode(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")


def batch_file(filename="menu.png", title="Menu", content=b"menu-bytes", file_type="image/png", **extra):
    entry = {
        "filename": filename,
        "fileType": file_type,
        "size": len(content),
        "title": title,
        "description": "",
        "fileData": encode(content),
    }
    entry.update(extra)
    return entry


async def batch_upload(client, user, files, category="general"):
    return await client.post(
        "/api/documents/batch-upload",
        json={"documents": files, "userId": user["id"], "userName": user["name"], "category": category},
    )
