class ServiceError(Exception):
    status = 400
    default_code = "SERVICE_ERROR"
    default_message = "Service error"

    def __init__(self, code=None, message=None, details=None):
        self.code = code or self.default_code
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class UnauthorizedError(ServiceError):
    status = 401
    default_code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class ForbiddenError(ServiceError):
    status = 403
    default_code = "FORBIDDEN"
    default_message = "Forbidden"


class NotFoundError(ServiceError):
    status = 404
    default_code = "NOT_FOUND"
    default_message = "Resource not found"


class InvalidOperationError(ServiceError):
    default_code = "INVALID_OPERATION"
    default_message = "Operation not allowed"


class InsufficientBalanceError(InvalidOperationError):
    default_code = "INSUFFICIENT_BALANCE"
    default_message = "Insufficient balance"


class ConflictError(ServiceError):
    status = 409
    default_code = "CONFLICT"
    default_message = "Resource state has changed"
