"""
Tests para endpoints de /pets
"""
import pytest
from fastapi import status
from httpx import AsyncClient, ASGITransport

from pet_registry.db import get_registry
from conftest import auth


def _create(client, add_payload, identity="alice"):
    response = client.post("/pets", json=add_payload, headers=auth(identity))
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ok"


def test_create_requires_auth(client, add_payload):
    response = client.post("/pets", json=add_payload)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

    response = client.post("/pets", json=add_payload, headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_create_and_get(client, add_payload):
    pet = _create(client, add_payload)
    assert pet["ownerDetail"]["id"] == "alice"
    assert pet["ownerDetail"]["phoneNumber"] == "555-0100"
    assert pet["dateOfBirth"] == "2021-04-02"
    assert pet["updatedAt"] is None
    assert pet["transferTo"] is None
    assert pet["status"] == "owned"

    # la lectura es pública
    response = client.get(f"/pets/{pet['id']}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == pet


def test_create_with_empty_field(client, add_payload):
    add_payload["petPayload"]["breed"] = ""
    response = client.post("/pets", json=add_payload, headers=auth("alice"))
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_get_unknown_pet(client):
    response = client.get("/pets/unknown-id")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert "not found" in response.json()["detail"]


def test_get_malformed_id(client):
    response = client.get(f"/pets/{'x' * 60}")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_pet_and_owner(client, add_payload, pet_payload):
    pet = _create(client, add_payload)

    response = client.put(f"/pets/{pet['id']}", json={**pet_payload, "name": "Rocky"}, headers=auth("alice"))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Rocky"
    assert response.json()["updatedAt"] is not None

    owner = {"name": "Alice", "address": "1 Main St", "phoneNumber": "555-0111"}
    response = client.put(f"/pets/{pet['id']}/owner", json=owner, headers=auth("alice"))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["ownerDetail"] == {**owner, "id": "alice"}


def test_update_by_non_owner_is_forbidden(client, add_payload, pet_payload):
    pet = _create(client, add_payload)
    response = client.put(f"/pets/{pet['id']}", json={**pet_payload, "name": "Stolen"}, headers=auth("mallory"))
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert client.get(f"/pets/{pet['id']}").json() == pet


def test_transfer_and_claim(client, add_payload):
    pet = _create(client, add_payload)

    response = client.post(f"/pets/{pet['id']}/transfer", json={"to": "bob"}, headers=auth("alice"))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["transferTo"] == "bob"
    assert response.json()["status"] == "pending_transfer"

    claim = {"name": "Jane", "address": "12 Elm", "phoneNumber": "555-1"}
    response = client.post(f"/pets/{pet['id']}/claim", json=claim, headers=auth("mallory"))
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = client.post(f"/pets/{pet['id']}/claim", json=claim, headers=auth("bob"))
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["ownerDetail"]["id"] == "bob"
    assert data["ownerDetail"]["name"] == "Jane"
    assert data["transferTo"] is None
    assert data["name"] == "Rex"

    # una segunda reclamación ya no tiene transferencia pendiente
    response = client.post(f"/pets/{pet['id']}/claim", json=claim, headers=auth("bob"))
    assert response.status_code == status.HTTP_409_CONFLICT


def test_transfer_by_non_owner(client, add_payload):
    pet = _create(client, add_payload)
    response = client.post(f"/pets/{pet['id']}/transfer", json={"to": "mallory"}, headers=auth("mallory"))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_delete_pet(client, add_payload):
    pet = _create(client, add_payload)

    response = client.delete(f"/pets/{pet['id']}", headers=auth("bob"))
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = client.delete(f"/pets/{pet['id']}", headers=auth("alice"))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == pet["id"]

    response = client.get(f"/pets/{pet['id']}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_dev_token(client):
    response = client.post("/dev/token", json={"identity": "carol"})
    assert response.status_code == status.HTTP_200_OK
    token = response.json()["access_token"]
    assert response.json()["token_type"] == "bearer"

    response = client.post("/pets/any-id/transfer", json={"to": "dave"},
                           headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_transfer_flow_async(registry, add_payload):
    from pet_registry.main import app
    app.state.limiter.enabled = False
    app.dependency_overrides[get_registry] = lambda: registry
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            r = await ac.post("/pets", json=add_payload, headers=auth("owner"))
            pet_id = r.json()["id"]

            r = await ac.post(f"/pets/{pet_id}/transfer", json={"to": "buyer"}, headers=auth("owner"))
            assert r.status_code == 200

            r = await ac.post(f"/pets/{pet_id}/claim",
                              json={"name": "Buyer", "address": "2 Elm", "phoneNumber": "555-2"},
                              headers=auth("buyer"))
            assert r.status_code == 200 and r.json()["ownerDetail"]["id"] == "buyer"
    finally:
        app.dependency_overrides.clear()


def test_create_keeps_surrounding_whitespace(client, add_payload):
    add_payload["petPayload"]["name"] = " Rex "
    pet = _create(client, add_payload)
    assert pet["name"] == " Rex "
    assert client.get(f"/pets/{pet['id']}").json()["name"] == " Rex "

    add_payload["petPayload"]["name"] = "   "
    response = client.post("/pets", json=add_payload, headers=auth("alice"))
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
