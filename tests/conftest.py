"""
Configuración de pytest para tests
"""
import os

# Antes de importar la app: almacenes en memoria y sin rate limiting
os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from pet_registry.db import get_registry
from pet_registry.registry import PetRegistry
from pet_registry.repository import PetRepository
from pet_registry.security import RequestContext, create_access_token
from pet_registry.store import MemoryStore

CREATED_AT = datetime(2026, 1, 10, 9, 30, tzinfo=timezone.utc)
LATER = datetime(2026, 1, 11, 18, 0, tzinfo=timezone.utc)


def context(caller: str, now: datetime = LATER) -> RequestContext:
    return RequestContext(caller=caller, now=now)


def auth(identity: str) -> dict:
    """Cabecera Authorization con un token para la identidad dada"""
    return {"Authorization": f"Bearer {create_access_token(identity)}"}


@pytest.fixture
def stores():
    return MemoryStore("pets", 2048), MemoryStore("pending_transfers", 1024)


@pytest.fixture
def repository(stores):
    records, pending = stores
    return PetRepository(records, pending)


@pytest.fixture
def registry(repository):
    return PetRegistry(repository)


@pytest.fixture
def client(registry):
    """Fixture para cliente de test de FastAPI con el registro en memoria"""
    from pet_registry.main import app
    app.state.limiter.enabled = False
    app.dependency_overrides[get_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def pet_payload():
    return {
        "name": "Rex",
        "breed": "Labrador",
        "sex": "M",
        "dateOfBirth": "2021-04-02",
        "imageUrl": "https://img.example.com/rex.jpg",
    }


@pytest.fixture
def owner_payload():
    return {"name": "Olivia", "address": "4 Oak Street", "phoneNumber": "555-0100"}


@pytest.fixture
def add_payload(pet_payload, owner_payload):
    return {"petPayload": pet_payload, "ownerPayload": owner_payload}
