class StoreError(Exception):
    """Base de todos los errores del cliente del store."""


class TransportError(StoreError):
    """La petición HTTP nunca se completó (red, DNS, timeout)."""


class RemoteRejected(StoreError):
    """El store respondió con un status no exitoso."""

    def __init__(self, status_code: int, status_text: str):
        super().__init__(f"Store rejected request: {status_code} {status_text}")
        self.status_code = status_code
        self.status_text = status_text


class SerializationError(StoreError):
    """El documento no pudo codificarse o decodificarse como JSON."""


class IndexOutOfRange(StoreError, IndexError):
    """Índice de tarea o subtarea inválido para el estado actual."""


class UnknownUser(StoreError):
    """No user record exists at the expected path."""
