"""
Rate limiting con slowapi para los endpoints que modifican registros
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config import get_settings

# Límite por defecto de las operaciones de escritura
WRITE_LIMIT = "30/minute"

# En tests se desactiva con RATE_LIMIT_ENABLED=false o limiter.enabled = False
limiter = Limiter(key_func=get_remote_address, enabled=get_settings().rate_limit_enabled)
