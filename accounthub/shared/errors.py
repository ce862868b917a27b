# accounthub/shared/errors.py


class AppError(Exception):
    """Base for failures the API reports to callers as {"success": false, ...}."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateError(AppError):
    status_code = 409


class UnauthorizedError(AppError):
    status_code = 401


class NotFoundError(AppError):
    status_code = 404

    @classmethod
    def for_id(cls, resource: str, resource_id: int) -> "NotFoundError":
        return cls(f"{resource} not found with id: {resource_id}")
