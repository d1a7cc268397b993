"""
Errores del registro de mascotas.

Todos heredan de RegistryError y llevan un mensaje legible. main.py los
traduce a respuestas HTTP con el status_code de cada clase.
"""


class RegistryError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(RegistryError):
    """Id vacío o mal formado, o algún campo del payload vacío."""
    status_code = 400


class Unauthorized(RegistryError):
    """El llamante no es el propietario ni el destinatario de la transferencia."""
    status_code = 403


class NotFound(RegistryError):
    status_code = 404


class NoPendingTransfer(RegistryError):
    """Se intentó reclamar una mascota sin transferencia pendiente."""
    status_code = 409
