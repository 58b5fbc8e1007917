"""API tokens: secret shown once, session-only management, revocation."""

from httpx import AsyncClient

from mailrelay.domain.enums import UserRole


async def _create_token(client: AsyncClient, headers: dict, name: str | None = "ci") -> dict:
    response = await client.post("/api/api-tokens", json={"name": name}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def test_create_shows_secret_once(client: AsyncClient, user) -> None:
    created = await _create_token(client, user.headers, "deploy bot")
    assert len(created["token"]) == 64
    assert created["name"] == "deploy bot"
    assert created["lastUsedAt"] is None
    assert "save this token" in created["message"].lower()

    listed = (await client.get("/api/api-tokens", headers=user.headers)).json()
    assert len(listed) == 1
    assert listed[0]["id"] == created["id"]
    assert "token" not in listed[0]


async def test_api_token_authenticates_and_records_use(client: AsyncClient, user) -> None:
    created = await _create_token(client, user.headers)
    response = await client.get("/api/accounts", headers=_bearer(created["token"]))
    assert response.status_code == 200
    listed = (await client.get("/api/api-tokens", headers=user.headers)).json()
    assert listed[0]["lastUsedAt"] is not None


async def test_api_token_cannot_manage_tokens(client: AsyncClient, user) -> None:
    """Token management and the session-only auth routes require a session token."""
    created = await _create_token(client, user.headers)
    headers = _bearer(created["token"])
    assert (await client.post("/api/api-tokens", json={}, headers=headers)).status_code == 403
    assert (await client.get("/api/api-tokens", headers=headers)).status_code == 403
    assert (
        await client.delete(f"/api/api-tokens/{created['id']}", headers=headers)
    ).status_code == 403
    assert (await client.get("/api/auth/me", headers=headers)).status_code == 403


async def test_revoked_token_stops_working(client: AsyncClient, user) -> None:
    created = await _create_token(client, user.headers)
    response = await client.delete(f"/api/api-tokens/{created['id']}", headers=user.headers)
    assert response.status_code == 204
    assert (await client.get("/api/accounts", headers=_bearer(created["token"]))).status_code == 401


async def test_double_delete_returns_404(client: AsyncClient, user) -> None:
    created = await _create_token(client, user.headers)
    await client.delete(f"/api/api-tokens/{created['id']}", headers=user.headers)
    again = await client.delete(f"/api/api-tokens/{created['id']}", headers=user.headers)
    assert again.status_code == 404


async def test_cannot_delete_someone_elses_token(client: AsyncClient, user, dev) -> None:
    created = await _create_token(client, user.headers)
    response = await client.delete(f"/api/api-tokens/{created['id']}", headers=dev.headers)
    assert response.status_code == 404
    assert (await client.get("/api/accounts", headers=_bearer(created["token"]))).status_code == 200


async def test_tokens_are_listed_per_user(client: AsyncClient, user, dev) -> None:
    await _create_token(client, user.headers, "mine")
    assert (await client.get("/api/api-tokens", headers=dev.headers)).json() == []


async def test_blank_name_stored_as_null(client: AsyncClient, user) -> None:
    created = await _create_token(client, user.headers, "   ")
    assert created["name"] is None


async def test_pending_password_change_blocks_token_management(
    client: AsyncClient, make_user
) -> None:
    actor = await make_user("forced@example.com", UserRole.USER, must_change_password=True)
    for response in (
        await client.post("/api/api-tokens", json={"name": "x"}, headers=actor.headers),
        await client.get("/api/api-tokens", headers=actor.headers),
        await client.delete("/api/api-tokens/missing", headers=actor.headers),
    ):
        assert response.status_code == 403
        assert response.json()["error"] == "PASSWORD_CHANGE_REQUIRED"


async def test_token_issued_before_forced_change_keeps_working(
    client: AsyncClient, admin, user
) -> None:
    """The gate applies to the session; a token minted earlier is still accepted."""
    created = await _create_token(client, user.headers)
    response = await client.patch(
        f"/api/users/{user.id}", json={"mustChangePassword": True}, headers=admin.headers
    )
    assert response.status_code == 200

    minted = await client.post("/api/api-tokens", json={"name": "late"}, headers=user.headers)
    assert minted.status_code == 403
    assert minted.json()["error"] == "PASSWORD_CHANGE_REQUIRED"
    assert (await client.get("/api/api-tokens", headers=user.headers)).status_code == 403
    assert (await client.get("/api/accounts", headers=user.headers)).status_code == 403
    assert (await client.get("/api/accounts", headers=_bearer(created["token"]))).status_code == 200


async def test_token_management_resumes_after_password_change(
    client: AsyncClient, make_user
) -> None:
    actor = await make_user("forced@example.com", UserRole.USER, must_change_password=True)
    response = await client.post(
        "/api/auth/change-password",
        json={"currentPassword": actor.password, "newPassword": "BrandNew123!"},
        headers=actor.headers,
    )
    assert response.status_code == 200
    await _create_token(client, actor.headers)
