class AppError(Exception):
    status_code = 500

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(AppError):
    """Raised when a row does not exist for the requesting owner.

    Batch operations treat this as a skip rather than a failure.
    """

    status_code = 404

    def __init__(self, resource: str, resource_id: int | str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} '{resource_id}' not found", code="NOT_FOUND")


class ValidationError(AppError):
    status_code = 422

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class ConflictError(AppError):
    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")


class UnauthorizedError(AppError):
    status_code = 401

    def __init__(self, message: str):
        super().__init__(message, code="UNAUTHORIZED")
