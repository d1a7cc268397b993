# pet_registry/utils.py
from .errors import InvalidArgument

# Tamaño máximo de clave en las tablas (bytes UTF-8)
MAX_KEY_BYTES = 44


def validate_key(value: str | None, field_name: str = "id") -> str:
    """
    Valida un id usado como clave de las tablas.
    Centraliza la comprobación para el servicio y el almacén.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"Invalid {field_name}: empty value")
    if len(value.encode("utf-8")) > MAX_KEY_BYTES:
        raise InvalidArgument(f"Invalid {field_name}: longer than {MAX_KEY_BYTES} bytes")
    return value


def validate_identity(value: str | None, field_name: str = "identity") -> str:
    """Una identidad es opaca: solo se exige que no esté vacía."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"Invalid {field_name}: empty value")
    return value
