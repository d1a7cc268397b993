from pydantic import BaseModel
import os
from dotenv import load_dotenv
load_dotenv()  # carga el archivo .env de la raíz


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "PetRegistry")
    env: str = os.getenv("APP_ENV", "dev")
    store_backend: str = os.getenv("STORE_BACKEND", "mongo").lower()
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    db_name: str = os.getenv("DB_NAME", "pet_registry")
    jwt_secret: str = os.getenv("JWT_SECRET", "change-me")
    jwt_expires_hours: int = int(os.getenv("JWT_EXPIRES_HOURS", "8"))
    # Límites por entrada de cada tabla (bytes del JSON serializado)
    record_max_bytes: int = int(os.getenv("RECORD_MAX_BYTES", "2048"))
    pending_max_bytes: int = int(os.getenv("PENDING_MAX_BYTES", "1024"))
    rate_limit_enabled: bool = _flag("RATE_LIMIT_ENABLED", "true")
    frontend_base_url: str = os.getenv("FRONTEND_BASE_URL", "http://localhost:5173")


_settings: Settings | None = None
def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
