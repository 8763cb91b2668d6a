class LeavePortalError(Exception):
    """Base class for errors raised by the leave service layer."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFound(LeavePortalError):
    status_code = 404


class Unauthorized(LeavePortalError):
    status_code = 403


class ValidationFailure(LeavePortalError):
    status_code = 400


class InsufficientBalance(ValidationFailure):
    def __init__(self, category: str):
        super().__init__(f"Insufficient {category} leave balance")
        self.category = category
