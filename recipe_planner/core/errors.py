"""Domain errors raised by the services and mapped to HTTP responses in main."""
from fastapi import status


class PlannerError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Bad request"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class Unauthenticated(PlannerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not authenticated"


class Forbidden(PlannerError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Forbidden"


class NotFound(PlannerError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class Conflict(PlannerError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Conflict"


class InvalidPlan(PlannerError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    detail = "Invalid meal plan"
