"""Integration tests for Users API."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from domain.entities.group import Group
from domain.value_objects.identifiers import GroupID
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

USERS = "/api/v1/users"


async def _create_user(
    client: AsyncClient, name: str = "Ann", email: str = "ann@x.com", role: str = "user"
) -> dict:
    response = await client.post(USERS, json={"name": name, "email": email, "role": role})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
async def seeded_group(session_factory: async_sessionmaker[AsyncSession]) -> str:
    """A group with a well-known ID that exists before the test starts."""
    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        await uow.groups.save(Group.create(GroupID("g1"), "Seeded"))
        await uow.commit()
    return "g1"


class TestUserLifecycle:
    @pytest.mark.asyncio
    async def test_full_membership_scenario(
        self, client: AsyncClient, seeded_group: str
    ) -> None:
        created = await _create_user(client, email="Ann@X.com")
        user_id = created["id"]

        fetched = await client.get(f"{USERS}/{user_id}")
        assert fetched.status_code == 200
        assert fetched.json()["email"] == "ann@x.com"

        duplicate = await client.post(
            USERS, json={"name": "Other Ann", "email": "ann@x.com", "role": "user"}
        )
        assert duplicate.status_code == 409
        assert duplicate.json()["code"] == "EMAIL_ALREADY_REGISTERED"

        promoted = await client.put(f"{USERS}/{user_id}/role", json={"role": "admin"})
        assert promoted.status_code == 200
        assert promoted.json()["role"] == "admin"

        joined = await client.post(f"{USERS}/{user_id}/groups", json={"groupId": seeded_group})
        assert joined.status_code == 200
        assert seeded_group in joined.json()["groupIds"]

        group = await client.get(f"/api/v1/groups/{seeded_group}")
        assert user_id in group.json()["memberIds"]

        deleted = await client.delete(f"{USERS}/{user_id}")
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "User deleted successfully", "id": user_id}

        gone = await client.get(f"{USERS}/{user_id}")
        assert gone.status_code == 404
        assert gone.json()["code"] == "USER_NOT_FOUND"

        group_after = await client.get(f"/api/v1/groups/{seeded_group}")
        assert group_after.json()["memberIds"] == []


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_response_uses_camel_case(self, client: AsyncClient) -> None:
        body = await _create_user(client)

        assert set(body) == {"id", "name", "email", "role", "groupIds", "createdAt", "updatedAt"}
        assert body["groupIds"] == []

    @pytest.mark.asyncio
    async def test_invalid_fields_are_reported_together(self, client: AsyncClient) -> None:
        response = await client.post(USERS, json={"name": " ", "email": "bad", "role": "root"})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert {d["field"] for d in body["details"]} == {"name", "email", "role"}

    @pytest.mark.asyncio
    async def test_missing_field_is_a_validation_error(self, client: AsyncClient) -> None:
        response = await client.post(USERS, json={"name": "Ann", "email": "ann@x.com"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_malformed_json_is_an_invalid_request(self, client: AsyncClient) -> None:
        response = await client.post(
            USERS, content=b'{"name": ', headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_REQUEST"

    @pytest.mark.asyncio
    async def test_invalid_user_is_not_persisted(self, client: AsyncClient) -> None:
        await client.post(USERS, json={"name": "", "email": "ann@x.com", "role": "user"})

        listing = await client.get(USERS)

        assert listing.json()["meta"]["total"] == 0


class TestListAndUpdate:
    @pytest.mark.asyncio
    async def test_list_users(self, client: AsyncClient) -> None:
        await _create_user(client, email="a@x.com")
        await _create_user(client, email="b@x.com")

        response = await client.get(USERS)

        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["total"] == 2
        assert {u["email"] for u in body["data"]} == {"a@x.com", "b@x.com"}

    @pytest.mark.asyncio
    async def test_update_profile(self, client: AsyncClient) -> None:
        user = await _create_user(client)

        response = await client.put(
            f"{USERS}/{user['id']}", json={"name": "Ann B", "email": "ann.b@x.com"}
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Ann B"
        assert response.json()["email"] == "ann.b@x.com"

    @pytest.mark.asyncio
    async def test_update_to_taken_email_conflicts(self, client: AsyncClient) -> None:
        await _create_user(client, email="a@x.com")
        second = await _create_user(client, email="b@x.com")

        response = await client.put(
            f"{USERS}/{second['id']}", json={"name": "B", "email": "A@x.com"}
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_update_unknown_user(self, client: AsyncClient) -> None:
        response = await client.put(f"{USERS}/ghost", json={"name": "G", "email": "g@x.com"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_role_change(self, client: AsyncClient) -> None:
        user = await _create_user(client)

        response = await client.put(f"{USERS}/{user['id']}/role", json={"role": "owner"})

        assert response.status_code == 400
        assert response.json()["details"][0]["code"] == "INVALID_ROLE"


class TestMembershipEndpoints:
    @pytest.mark.asyncio
    async def test_join_twice_conflicts(self, client: AsyncClient, seeded_group: str) -> None:
        user = await _create_user(client)
        url = f"{USERS}/{user['id']}/groups"

        await client.post(url, json={"groupId": seeded_group})
        response = await client.post(url, json={"groupId": seeded_group})

        assert response.status_code == 409
        assert response.json()["code"] == "MEMBERSHIP_CONFLICT"

    @pytest.mark.asyncio
    async def test_join_unknown_group(self, client: AsyncClient) -> None:
        user = await _create_user(client)

        response = await client.post(f"{USERS}/{user['id']}/groups", json={"groupId": "nope"})

        assert response.status_code == 404
        assert response.json()["code"] == "GROUP_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_leave_group(self, client: AsyncClient, seeded_group: str) -> None:
        user = await _create_user(client)
        url = f"{USERS}/{user['id']}/groups"
        await client.post(url, json={"groupId": seeded_group})

        response = await client.request("DELETE", url, json={"groupId": seeded_group})

        assert response.status_code == 200
        assert response.json()["groupIds"] == []
        group = await client.get(f"/api/v1/groups/{seeded_group}")
        assert group.json()["memberIds"] == []

    @pytest.mark.asyncio
    async def test_leave_group_not_joined_conflicts(
        self, client: AsyncClient, seeded_group: str
    ) -> None:
        user = await _create_user(client)

        response = await client.request(
            "DELETE", f"{USERS}/{user['id']}/groups", json={"groupId": seeded_group}
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_list_user_groups(self, client: AsyncClient, seeded_group: str) -> None:
        user = await _create_user(client)
        await client.post(f"{USERS}/{user['id']}/groups", json={"groupId": seeded_group})

        response = await client.get(f"{USERS}/{user['id']}/groups")

        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["total"] == 1
        assert body["data"][0]["id"] == seeded_group
        assert body["data"][0]["memberIds"] == [user["id"]]

    @pytest.mark.asyncio
    async def test_list_groups_of_unknown_user(self, client: AsyncClient) -> None:
        response = await client.get(f"{USERS}/ghost/groups")

        assert response.status_code == 404
