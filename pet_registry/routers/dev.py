# pet_registry/routers/dev.py
# Endpoint de desarrollo para obtener tokens de cualquier identidad
from fastapi import APIRouter
from pydantic import BaseModel, Field
from ..security import create_access_token

router = APIRouter()


class TokenRequest(BaseModel):
    identity: str = Field(..., min_length=1, max_length=128)
    expires_hours: int | None = Field(None, ge=1, le=720)


@router.post("/token")
async def issue_token(payload: TokenRequest):
    """
    Emite un token JWT cuyo 'sub' es la identidad pedida.
    Solo para desarrollo: no hay usuarios ni contraseñas en el registro.
    """
    token = create_access_token(payload.identity, payload.expires_hours)
    return {"access_token": token, "token_type": "bearer"}
