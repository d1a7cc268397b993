from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
import logging

from .config import get_settings
from .db import close_db
from .errors import RegistryError
from .middleware.rate_limit import limiter
from .routers import pets

# Configurar logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(title=settings.app_name)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RegistryError)
async def registry_error_handler(request: Request, exc: RegistryError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.on_event("shutdown")
def shutdown():
    close_db()


# Configuración de CORS según entorno
if settings.env == "dev":
    cors_origins = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    cors_regex = r"https?://(localhost|127\.0\.0\.1)(:\d+)?"
else:
    # Producción: solo el frontend configurado
    frontend_url = settings.frontend_base_url
    cors_origins = [frontend_url] if frontend_url else []
    cors_regex = None

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_origin_regex=cors_regex,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept"],
)


@app.get("/health")
async def health():
    return {"status": "ok", "env": settings.env, "store_backend": settings.store_backend}


app.include_router(pets.router, prefix="/pets", tags=["pets"])

# Endpoint de desarrollo (solo en dev)
if settings.env == "dev":
    from .routers import dev
    app.include_router(dev.router, prefix="/dev", tags=["dev"])
