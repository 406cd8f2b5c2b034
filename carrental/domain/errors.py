"""Excepciones de dominio para el sistema de reservas de autos."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores de Validación ===


class ValidationError(DomainError):
    """Campo faltante o inválido en el borrador; se reporta antes de cualquier escritura."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Validation failed on '{field}': {message}",
            code="VALIDATION_ERROR",
        )
        self.field = field


# === Errores de Persistencia ===


class TransientStoreError(DomainError):
    """Falla de lectura/escritura contra el servicio de persistencia."""

    def __init__(self, operation: str, collection: str, detail: str | None = None):
        message = f"Store {operation} on '{collection}' failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message=message, code="TRANSIENT_STORE_ERROR")
        self.operation = operation
        self.collection = collection
        self.detail = detail


class NotFoundError(DomainError):
    """La entidad referenciada no existe al momento de escribir."""

    def __init__(self, entity: str, identifier: str):
        super().__init__(
            message=f"{entity} not found: {identifier}",
            code="NOT_FOUND",
        )
        self.entity = entity
        self.identifier = identifier


# === Errores de Reserva ===


class InvalidTransitionError(DomainError):
    """La máquina de estados no permite el cambio solicitado."""

    def __init__(self, current_status: str, requested_status: str):
        super().__init__(
            message=f"Cannot move booking from '{current_status}' to '{requested_status}'",
            code="INVALID_TRANSITION",
        )
        self.current_status = current_status
        self.requested_status = requested_status
