from fastapi import APIRouter, Depends, Request, status
from ..db import get_registry
from ..middleware.rate_limit import limiter, WRITE_LIMIT
from ..registry import PetRegistry
from ..schemas.pet import AddPetPayload, OwnerPayload, PetPayload, PetRecord, TransferPayload
from ..security import RequestContext, get_request_context

router = APIRouter()


@router.get("/{pet_id}", response_model=PetRecord)
async def get_pet_record(pet_id: str, registry: PetRegistry = Depends(get_registry)):
    return await registry.get_pet_record(pet_id)


@router.post("", response_model=PetRecord, status_code=status.HTTP_201_CREATED)
@limiter.limit(WRITE_LIMIT)
async def add_pet(
    request: Request,
    payload: AddPetPayload,
    ctx: RequestContext = Depends(get_request_context),
    registry: PetRegistry = Depends(get_registry),
):
    # el propietario es siempre quien hace la petición
    return await registry.add_pet(ctx, payload)


@router.put("/{pet_id}", response_model=PetRecord)
@limiter.limit(WRITE_LIMIT)
async def update_pet_information(
    request: Request,
    pet_id: str,
    payload: PetPayload,
    ctx: RequestContext = Depends(get_request_context),
    registry: PetRegistry = Depends(get_registry),
):
    return await registry.update_pet_information(ctx, pet_id, payload)


@router.put("/{pet_id}/owner", response_model=PetRecord)
@limiter.limit(WRITE_LIMIT)
async def update_owner_information(
    request: Request,
    pet_id: str,
    payload: OwnerPayload,
    ctx: RequestContext = Depends(get_request_context),
    registry: PetRegistry = Depends(get_registry),
):
    return await registry.update_owner_information(ctx, pet_id, payload)


@router.post("/{pet_id}/transfer", response_model=PetRecord)
@limiter.limit(WRITE_LIMIT)
async def transfer_pet(
    request: Request,
    pet_id: str,
    payload: TransferPayload,
    ctx: RequestContext = Depends(get_request_context),
    registry: PetRegistry = Depends(get_registry),
):
    return await registry.transfer_pet(ctx, pet_id, payload.to)


@router.post("/{pet_id}/claim", response_model=PetRecord)
@limiter.limit(WRITE_LIMIT)
async def claim_pet(
    request: Request,
    pet_id: str,
    payload: OwnerPayload,
    ctx: RequestContext = Depends(get_request_context),
    registry: PetRegistry = Depends(get_registry),
):
    return await registry.claim_pet(ctx, pet_id, payload)


@router.delete("/{pet_id}", response_model=PetRecord)
@limiter.limit(WRITE_LIMIT)
async def delete_pet(
    request: Request,
    pet_id: str,
    ctx: RequestContext = Depends(get_request_context),
    registry: PetRegistry = Depends(get_registry),
):
    # devuelve el registro eliminado como confirmación
    return await registry.delete_pet(ctx, pet_id)
