"""
Almacenes clave-valor duraderos.

Cada tabla (registros de mascotas, transferencias pendientes) es un almacén
independiente: clave str -> valor str (JSON serializado). Ningún almacén es
transaccional respecto al otro.
"""
import logging

from motor.motor_asyncio import AsyncIOMotorCollection

from .errors import InvalidArgument
from .utils import MAX_KEY_BYTES

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Interfaz común: get/put/delete con límites de tamaño por entrada."""

    def __init__(self, name: str, max_value_bytes: int, max_key_bytes: int = MAX_KEY_BYTES):
        self.name = name
        self.max_value_bytes = max_value_bytes
        self.max_key_bytes = max_key_bytes

    def check(self, key: str, value: str) -> None:
        """Lanza InvalidArgument si la escritura excede los límites de la tabla."""
        if not key:
            raise InvalidArgument(f"Empty key for {self.name}")
        if len(key.encode("utf-8")) > self.max_key_bytes:
            raise InvalidArgument(f"Key for {self.name} exceeds {self.max_key_bytes} bytes")
        size = len(value.encode("utf-8"))
        if size > self.max_value_bytes:
            raise InvalidArgument(
                f"Value for {self.name} is {size} bytes, maximum is {self.max_value_bytes}"
            )

    async def get(self, key: str) -> str | None:
        raise NotImplementedError

    async def put(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def delete(self, key: str) -> str | None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Almacén en memoria del proceso, ordenado por clave. Útil en tests y desarrollo."""

    def __init__(self, name: str, max_value_bytes: int, max_key_bytes: int = MAX_KEY_BYTES):
        super().__init__(name, max_value_bytes, max_key_bytes)
        self._data: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> list[str]:
        return sorted(self._data)

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self.check(key, value)
        self._data[key] = value

    async def delete(self, key: str) -> str | None:
        return self._data.pop(key, None)


class MongoStore(KeyValueStore):
    """Una colección de MongoDB por tabla; documentos {_id: clave, value: json}."""

    def __init__(self, collection: AsyncIOMotorCollection, max_value_bytes: int,
                 max_key_bytes: int = MAX_KEY_BYTES):
        super().__init__(collection.name, max_value_bytes, max_key_bytes)
        self.collection = collection

    async def get(self, key: str) -> str | None:
        doc = await self.collection.find_one({"_id": key})
        if not doc:
            return None
        return doc["value"]

    async def put(self, key: str, value: str) -> None:
        self.check(key, value)
        await self.collection.replace_one({"_id": key}, {"_id": key, "value": value}, upsert=True)

    async def delete(self, key: str) -> str | None:
        doc = await self.collection.find_one_and_delete({"_id": key})
        if not doc:
            return None
        logger.debug(f"Eliminada clave {key} de {self.name}")
        return doc["value"]
