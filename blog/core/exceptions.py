from fastapi import status


class AppException(Exception):
    """Base error carrying the status code and the message safe to show clients."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal server error"

    def __init__(self, message: str = "", detail: str | None = None):
        super().__init__(message or self.detail)
        if detail is not None:
            self.detail = detail


class PostValidationError(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid post"


class PersistError(AppException):
    detail = "Failed to save uploaded image"


# Avatar download failures

class FetchError(AppException):
    detail = "Failed to fetch avatar"


class HttpStatusError(FetchError):
    def __init__(self, status_code: int, url: str):
        super().__init__(f"Avatar source {url} answered with status {status_code}")
        self.response_status = status_code


class InvalidImageError(FetchError):
    pass


class NetworkError(FetchError):
    pass


class FetchIOError(FetchError):
    pass


# Post table failures

class StoreError(AppException):
    detail = "Failed to store post"


class ConstraintError(StoreError):
    pass


class UnavailableError(StoreError):
    pass
