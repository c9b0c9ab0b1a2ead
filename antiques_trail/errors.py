"""Domain errors raised by the service layer and mapped to HTTP codes by routes."""


class ValidationError(ValueError):
    status_code = 400


class NotFoundError(ValueError):
    status_code = 404


class ConflictError(ValueError):
    status_code = 409
