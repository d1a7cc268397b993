from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

# Los payloads y registros viajan en camelCase (dateOfBirth, ownerDetail...)
camel_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Payload(BaseModel):
    """Los valores se guardan tal cual llegan; solo se rechazan los vacíos o en blanco."""
    model_config = camel_config

    @field_validator("*")
    @classmethod
    def not_blank(cls, v):
        if isinstance(v, str) and not v.strip():
            raise ValueError("El campo no puede estar vacío")
        return v


class TransferStatus(str, Enum):
    owned = "owned"
    pending_transfer = "pending_transfer"


class PetPayload(Payload):
    name: str = Field(..., min_length=1)
    breed: str = Field(..., min_length=1)
    sex: str = Field(..., min_length=1)
    date_of_birth: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)


class OwnerPayload(Payload):
    """Datos de contacto del propietario. También se usa para reclamar una mascota."""

    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    phone_number: str = Field(..., min_length=1)


class AddPetPayload(BaseModel):
    model_config = camel_config

    pet_payload: PetPayload
    owner_payload: OwnerPayload


class TransferPayload(BaseModel):
    to: str = Field(..., min_length=1, description="Identidad del nuevo propietario")


class OwnerData(OwnerPayload):
    id: str = Field(..., min_length=1)


class PetRecord(BaseModel):
    model_config = camel_config

    id: str
    name: str
    breed: str
    sex: str
    date_of_birth: str
    image_url: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    status: TransferStatus = TransferStatus.owned
    transfer_to: Optional[str] = None
    owner_detail: OwnerData

    @model_validator(mode="after")
    def check_transfer_state(self):
        """status y transfer_to deben describir el mismo estado"""
        pending = self.status == TransferStatus.pending_transfer
        if pending != (self.transfer_to is not None):
            raise ValueError("transferTo must be set exactly while a transfer is pending")
        return self
