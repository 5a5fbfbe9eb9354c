class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    error_code: str = 'INTERNAL_ERROR'

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    error_code = 'DOMAIN_ERROR'

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    error_code = 'NOT_FOUND'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    error_code = 'CONFLICT'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    error_code = 'UNAUTHORIZED'

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class UpstreamServiceError(CustomBaseError):
    """A third-party dependency failed; safe for the caller to retry"""

    error_code = 'UPSTREAM_ERROR'

    def __init__(self, message: str) -> None:
        super().__init__(message, 502)


class ServiceUnavailableError(CustomBaseError):
    error_code = 'SERVICE_UNAVAILABLE'

    def __init__(self, message: str) -> None:
        super().__init__(message, 503)
