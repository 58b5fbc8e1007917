"""Aliases API: attachment to accounts, ownership and address uniqueness."""

from httpx import AsyncClient


async def _create_alias(client: AsyncClient, headers: dict, account_id: str, email: str, **fields):
    return await client.post(
        "/api/aliases",
        json={"aliasEmail": email, "accountId": account_id, **fields},
        headers=headers,
    )


async def test_admin_creates_alias_with_parent_details(
    client: AsyncClient, admin, create_account
) -> None:
    account = await create_account(admin.headers, "shared@example.com", display_name="Shared")
    response = await _create_alias(
        client, admin.headers, account["id"], "Sales@Example.com", displayName="Sales"
    )
    assert response.status_code == 201
    body = response.json()
    assert body["aliasEmail"] == "sales@example.com"
    assert body["displayName"] == "Sales"
    assert body["accountId"] == account["id"]
    assert body["accountEmail"] == "shared@example.com"
    assert body["accountDisplayName"] == "Shared"
    assert body["accountIsActive"] is True


async def test_dev_adds_alias_to_own_account(client: AsyncClient, dev, create_account) -> None:
    account = await create_account(dev.headers, "devbox@example.com")
    response = await _create_alias(client, dev.headers, account["id"], "devalias@example.com")
    assert response.status_code == 201
    assert response.json()["ownerId"] == dev.id


async def test_dev_cannot_add_alias_to_foreign_account(
    client: AsyncClient, admin, dev, create_account
) -> None:
    account = await create_account(admin.headers, "shared@example.com")
    response = await _create_alias(client, dev.headers, account["id"], "sneaky@example.com")
    assert response.status_code == 403


async def test_user_cannot_create_alias(client: AsyncClient, admin, user, create_account) -> None:
    account = await create_account(admin.headers, "shared@example.com")
    response = await _create_alias(client, user.headers, account["id"], "mine@example.com")
    assert response.status_code == 403


async def test_alias_on_unknown_account_returns_400(client: AsyncClient, admin) -> None:
    response = await _create_alias(client, admin.headers, "missing", "sales@example.com")
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "accountId"


async def test_alias_email_cannot_match_an_account(
    client: AsyncClient, admin, create_account
) -> None:
    """Account and alias addresses share one namespace."""
    account = await create_account(admin.headers, "shared@example.com")
    await create_account(admin.headers, "taken@example.com")
    response = await _create_alias(client, admin.headers, account["id"], "taken@example.com")
    assert response.status_code == 409


async def test_account_email_cannot_match_an_alias(
    client: AsyncClient, admin, create_account
) -> None:
    account = await create_account(admin.headers, "shared@example.com")
    await _create_alias(client, admin.headers, account["id"], "sales@example.com")
    response = await client.post(
        "/api/accounts",
        json={"email": "sales@example.com", "displayName": "Sales", "password": "secret"},
        headers=admin.headers,
    )
    assert response.status_code == 409


async def test_duplicate_alias_returns_409(client: AsyncClient, admin, create_account) -> None:
    account = await create_account(admin.headers, "shared@example.com")
    first = await _create_alias(client, admin.headers, account["id"], "sales@example.com")
    assert first.status_code == 201
    second = await _create_alias(client, admin.headers, account["id"], "sales@example.com")
    assert second.status_code == 409


async def test_user_sees_public_aliases_only(
    client: AsyncClient, admin, user, create_account
) -> None:
    account = await create_account(admin.headers, "shared@example.com")
    public = (await _create_alias(client, admin.headers, account["id"], "sales@example.com")).json()
    await _create_alias(client, admin.headers, account["id"], "hr@example.com", isPublic=False)
    listed = (await client.get("/api/aliases", headers=user.headers)).json()
    assert [a["id"] for a in listed] == [public["id"]]


async def test_dev_updates_own_alias(client: AsyncClient, dev, create_account) -> None:
    account = await create_account(dev.headers, "devbox@example.com")
    alias = (await _create_alias(client, dev.headers, account["id"], "devalias@example.com")).json()
    response = await client.patch(
        f"/api/aliases/{alias['id']}",
        json={"displayName": "Team", "isActive": False},
        headers=dev.headers,
    )
    assert response.status_code == 200
    assert response.json()["displayName"] == "Team"
    assert response.json()["isActive"] is False


async def test_dev_cannot_move_alias_between_accounts(
    client: AsyncClient, dev, create_account
) -> None:
    """accountId is privileged: moving an alias changes which credential it sends with."""
    first = await create_account(dev.headers, "devbox@example.com")
    second = await create_account(dev.headers, "devbox2@example.com")
    alias = (await _create_alias(client, dev.headers, first["id"], "devalias@example.com")).json()
    response = await client.patch(
        f"/api/aliases/{alias['id']}", json={"accountId": second["id"]}, headers=dev.headers
    )
    assert response.status_code == 403


async def test_admin_moves_alias(client: AsyncClient, admin, create_account) -> None:
    first = await create_account(admin.headers, "one@example.com")
    second = await create_account(admin.headers, "two@example.com")
    alias = (await _create_alias(client, admin.headers, first["id"], "sales@example.com")).json()
    response = await client.patch(
        f"/api/aliases/{alias['id']}", json={"accountId": second["id"]}, headers=admin.headers
    )
    assert response.status_code == 200
    assert response.json()["accountEmail"] == "two@example.com"


async def test_clear_alias_display_name(client: AsyncClient, admin, create_account) -> None:
    account = await create_account(admin.headers, "shared@example.com")
    alias = (
        await _create_alias(client, admin.headers, account["id"], "sales@example.com", displayName="Sales")
    ).json()
    response = await client.patch(
        f"/api/aliases/{alias['id']}", json={"displayName": None}, headers=admin.headers
    )
    assert response.status_code == 200
    assert response.json()["displayName"] is None


async def test_delete_alias(client: AsyncClient, admin, create_account) -> None:
    account = await create_account(admin.headers, "shared@example.com")
    alias = (await _create_alias(client, admin.headers, account["id"], "sales@example.com")).json()
    assert (await client.delete(f"/api/aliases/{alias['id']}", headers=admin.headers)).status_code == 204
    assert (await client.delete(f"/api/aliases/{alias['id']}", headers=admin.headers)).status_code == 404


async def test_delete_default_sender_alias_returns_409(
    client: AsyncClient, admin, create_account
) -> None:
    account = await create_account(admin.headers, "shared@example.com")
    alias = (await _create_alias(client, admin.headers, account["id"], "noreply@example.com")).json()
    await client.put(
        "/api/settings/default-sender",
        json={"senderType": "alias", "senderId": alias["id"]},
        headers=admin.headers,
    )
    response = await client.delete(f"/api/aliases/{alias['id']}", headers=admin.headers)
    assert response.status_code == 409
