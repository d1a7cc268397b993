from .schemas.pet import PetRecord
from .store import KeyValueStore


class PetRepository:
    """
    Accesos tipados a las dos tablas: registros de mascotas y transferencias
    pendientes (id de mascota -> identidad del destinatario).

    La tabla de pendientes se deriva del registro en cada put(): nadie más
    la escribe, así transfer_to y la entrada pendiente no pueden divergir.
    """

    def __init__(self, records: KeyValueStore, pending: KeyValueStore):
        self.records = records
        self.pending = pending

    async def get(self, pet_id: str) -> PetRecord | None:
        raw = await self.records.get(pet_id)
        if raw is None:
            return None
        return PetRecord.model_validate_json(raw)

    async def put(self, record: PetRecord) -> None:
        raw = record.model_dump_json(by_alias=True)
        # Ambos límites se comprueban antes de escribir en cualquiera de las tablas
        self.records.check(record.id, raw)
        if record.transfer_to is not None:
            self.pending.check(record.id, record.transfer_to)

        await self.records.put(record.id, raw)
        if record.transfer_to is not None:
            await self.pending.put(record.id, record.transfer_to)
        else:
            await self.pending.delete(record.id)

    async def delete(self, pet_id: str) -> PetRecord | None:
        # La entrada pendiente, si existe, queda huérfana
        raw = await self.records.delete(pet_id)
        if raw is None:
            return None
        return PetRecord.model_validate_json(raw)

    async def get_pending(self, pet_id: str) -> str | None:
        return await self.pending.get(pet_id)
