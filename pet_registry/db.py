from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from .config import get_settings
from .registry import PetRegistry
from .repository import PetRepository
from .store import KeyValueStore, MemoryStore, MongoStore

_settings = get_settings()
_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None
_stores: tuple[KeyValueStore, KeyValueStore] | None = None


async def get_db() -> AsyncIOMotorDatabase:
    global _client, _db
    if _db is None:
        _client = AsyncIOMotorClient(_settings.mongodb_uri)
        _db = _client[_settings.db_name]
    return _db


async def get_stores() -> tuple[KeyValueStore, KeyValueStore]:
    """Devuelve (registros, pendientes) según STORE_BACKEND; se crean una sola vez por proceso."""
    global _stores
    if _stores is None:
        if _settings.store_backend == "memory":
            _stores = (
                MemoryStore("pets", _settings.record_max_bytes),
                MemoryStore("pending_transfers", _settings.pending_max_bytes),
            )
        else:
            db = await get_db()
            _stores = (
                MongoStore(db.pets, _settings.record_max_bytes),
                MongoStore(db.pending_transfers, _settings.pending_max_bytes),
            )
    return _stores


async def get_registry() -> PetRegistry:
    records, pending = await get_stores()
    return PetRegistry(PetRepository(records, pending))


def close_db() -> None:
    global _client, _db, _stores
    if _client is not None:
        _client.close()
    _client = None
    _db = None
    _stores = None
