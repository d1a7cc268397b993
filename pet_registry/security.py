from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError

from .config import get_settings

settings = get_settings()
ALGO = "HS256"
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/dev/token")


@dataclass(frozen=True)
class RequestContext:
    """Identidad autenticada del llamante y hora de la petición."""
    caller: str
    now: datetime


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(identity: str, expires_hours: Optional[int] = None) -> str:
    expire = utc_now() + timedelta(hours=expires_hours or settings.jwt_expires_hours)
    payload = {"sub": identity, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGO)


async def get_current_identity(token: str = Depends(oauth2_scheme)) -> str:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGO])
        sub = payload.get("sub")
        if not sub:
            raise HTTPException(status_code=401, detail="Invalid token")
        return str(sub)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")


async def get_request_context(identity: str = Depends(get_current_identity)) -> RequestContext:
    return RequestContext(caller=identity, now=utc_now())
