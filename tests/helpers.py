"""Request helpers shared by the API tests."""

from httpx import AsyncClient

USER_PASSWORD = "password123"


async def register(client: AsyncClient, username: str, password: str = USER_PASSWORD):
    response = await client.post(
        "/api/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


async def login(client: AsyncClient, username: str, password: str = USER_PASSWORD):
    response = await client.post(
        "/api/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()


async def issue_token(client: AsyncClient, label: str | None = None) -> str:
    response = await client.post("/api/tokens", json={"label": label})
    assert response.status_code == 201, response.text
    return response.json()["token"]


async def create_bookmark(
    client: AsyncClient, token: str, title: str, *, is_public: bool = False, **extra
) -> dict:
    payload = {"title": title, "url": f"https://example.com/{title.replace(' ', '-')}"}
    payload.update(extra)
    payload["isPublic"] = is_public
    response = await client.post("/api/bookmarks", json=payload, headers=bearer(token))
    assert response.status_code == 201, response.text
    return response.json()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
