"""
Registro de mascotas con transferencia de propiedad en dos fases.

Estados de un registro: owned -> (transfer_pet) -> pending_transfer ->
(claim_pet) -> owned. delete_pet lo elimina en cualquier estado.
Validación y autorización se hacen siempre antes de escribir.
"""
import logging
from typing import Any, Callable
from uuid import uuid4

from pydantic import BaseModel, ValidationError

from .errors import InvalidArgument, NoPendingTransfer, NotFound, Unauthorized
from .repository import PetRepository
from .schemas.pet import (
    AddPetPayload,
    OwnerData,
    OwnerPayload,
    PetPayload,
    PetRecord,
    TransferStatus,
)
from .security import RequestContext
from .utils import validate_identity, validate_key

logger = logging.getLogger(__name__)


def _parse(model: type[BaseModel], payload: Any, what: str):
    """Acepta un modelo o un dict; cualquier campo vacío o ausente es InvalidArgument."""
    if isinstance(payload, model):
        payload = payload.model_dump()
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise InvalidArgument(f"Invalid {what} payload: {fields}")


class PetRegistry:
    def __init__(self, repository: PetRepository, id_factory: Callable[[], str] = lambda: str(uuid4())):
        self.repository = repository
        self.id_factory = id_factory

    async def _load(self, pet_id: str) -> PetRecord:
        validate_key(pet_id, "pet id")
        pet = await self.repository.get(pet_id)
        if pet is None:
            raise NotFound(f"Pet with ID {pet_id} not found")
        return pet

    async def _load_owned(self, ctx: RequestContext, pet_id: str, action: str) -> PetRecord:
        pet = await self._load(pet_id)
        if pet.owner_detail.id != ctx.caller:
            logger.warning(f"{ctx.caller} intentó {action} la mascota {pet_id} sin ser el propietario")
            raise Unauthorized(f"Only pet owner can {action} record")
        return pet

    async def get_pet_record(self, pet_id: str) -> PetRecord:
        return await self._load(pet_id)

    async def add_pet(self, ctx: RequestContext, payload: AddPetPayload | dict) -> PetRecord:
        # Como en el resto de operaciones: primero el payload, después el llamante
        payload = _parse(AddPetPayload, payload, "add pet")
        validate_identity(ctx.caller, "caller")

        pet = PetRecord(
            id=self.id_factory(),
            created_at=ctx.now,
            owner_detail=OwnerData(id=ctx.caller, **payload.owner_payload.model_dump()),
            **payload.pet_payload.model_dump(),
        )
        await self.repository.put(pet)
        logger.info(f"Mascota {pet.id} registrada por {ctx.caller}")
        return pet

    async def update_owner_information(self, ctx: RequestContext, pet_id: str,
                                       payload: OwnerPayload | dict) -> PetRecord:
        payload = _parse(OwnerPayload, payload, "owner")
        pet = await self._load_owned(ctx, pet_id, "edit")

        # Reemplazo completo de los datos de contacto; la identidad se conserva
        updated = pet.model_copy(update={
            "owner_detail": OwnerData(id=pet.owner_detail.id, **payload.model_dump()),
            "updated_at": ctx.now,
        })
        await self.repository.put(updated)
        logger.info(f"Datos del propietario de {pet_id} actualizados")
        return updated

    async def update_pet_information(self, ctx: RequestContext, pet_id: str,
                                     payload: PetPayload | dict) -> PetRecord:
        payload = _parse(PetPayload, payload, "pet")
        pet = await self._load_owned(ctx, pet_id, "edit")

        updated = pet.model_copy(update={**payload.model_dump(), "updated_at": ctx.now})
        await self.repository.put(updated)
        logger.info(f"Datos de la mascota {pet_id} actualizados")
        return updated

    async def transfer_pet(self, ctx: RequestContext, pet_id: str, to: str) -> PetRecord:
        validate_identity(to, "transferee")
        pet = await self._load_owned(ctx, pet_id, "transfer")

        # Una transferencia previa sin reclamar se sustituye sin aviso
        if pet.transfer_to is not None:
            logger.info(f"Transferencia pendiente de {pet_id} a {pet.transfer_to} reemplazada por {to}")
        updated = pet.model_copy(update={
            "status": TransferStatus.pending_transfer,
            "transfer_to": to,
            "updated_at": ctx.now,
        })
        await self.repository.put(updated)
        logger.info(f"Mascota {pet_id} pendiente de transferencia a {to}")
        return updated

    async def claim_pet(self, ctx: RequestContext, pet_id: str, payload: OwnerPayload | dict) -> PetRecord:
        payload = _parse(OwnerPayload, payload, "claim")
        pet = await self._load(pet_id)

        pending_to = await self.repository.get_pending(pet.id)
        if pending_to is None:
            raise NoPendingTransfer(f"Couldn't claim pet with id={pet_id}. Pet not assigned for transfer")
        if pending_to != ctx.caller:
            logger.warning(f"{ctx.caller} intentó reclamar {pet_id} asignada a otra identidad")
            raise Unauthorized(f"Couldn't claim pet with id={pet_id}. Pet not assigned to you")

        updated = pet.model_copy(update={
            "status": TransferStatus.owned,
            "transfer_to": None,
            "owner_detail": OwnerData(id=ctx.caller, **payload.model_dump()),
            "updated_at": ctx.now,
        })
        await self.repository.put(updated)
        logger.info(f"Mascota {pet_id} reclamada por {ctx.caller}")
        return updated

    async def delete_pet(self, ctx: RequestContext, pet_id: str) -> PetRecord:
        pet = await self._load_owned(ctx, pet_id, "delete")
        await self.repository.delete(pet_id)
        logger.info(f"Mascota {pet_id} eliminada por {ctx.caller}")
        return pet
