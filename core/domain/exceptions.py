"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised when input fails a business validation rule."""

    def __init__(self, message: str = "Invalid input", field: str = None):
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class NotFoundError(DomainException):
    """Base exception for missing aggregates."""

    pass


class ConflictError(DomainException):
    """Base exception for uniqueness conflicts."""

    pass


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(NotFoundError, LicenseException):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class SeatNotFoundError(NotFoundError, LicenseException):
    """Raised when a seat is not found."""

    def __init__(self, message: str = "Seat not found"):
        super().__init__(message, code="SEAT_NOT_FOUND")


class SeatsInUseError(LicenseException):
    """Raised when seats cannot be removed because they are assigned."""

    def __init__(self, message: str = "Assigned seats cannot be removed"):
        super().__init__(message, code="SEATS_IN_USE")


class LicenseTypeChangeBlockedError(LicenseException):
    """Raised when a license type switch is attempted with active assignments."""

    def __init__(self, active_assignments: int):
        super().__init__(
            f"License has {active_assignments} active assignment(s); "
            "return all assignments before changing the license type.",
            code="LICENSE_TYPE_CHANGE_BLOCKED",
        )
        self.active_assignments = active_assignments


class DuplicateSeatKeyError(ConflictError, LicenseException):
    """Raised when a seat key is already registered on another seat."""

    def __init__(self, license_name: str):
        super().__init__(
            f'Key is already registered to "{license_name}".',
            code="DUPLICATE_SEAT_KEY",
        )
        self.license_name = license_name


class EmployeeException(DomainException):
    """Base exception for employee-related errors."""

    pass


class EmployeeNotFoundError(NotFoundError, EmployeeException):
    """Raised when an employee is not found."""

    def __init__(self, message: str = "Employee not found"):
        super().__init__(message, code="EMPLOYEE_NOT_FOUND")


class DuplicateEmailError(ConflictError, EmployeeException):
    """Raised when an employee email is already in use."""

    def __init__(self, email: str):
        super().__init__(f'Email "{email}" is already in use.', code="DUPLICATE_EMAIL")


class GroupNotFoundError(NotFoundError):
    """Raised when a license group is not found."""

    def __init__(self, message: str = "Group not found"):
        super().__init__(message, code="GROUP_NOT_FOUND")


class DuplicateGroupNameError(ConflictError):
    """Raised when a group name is already taken."""

    def __init__(self, name: str):
        super().__init__(f'Group "{name}" already exists.', code="DUPLICATE_GROUP_NAME")


class AssignmentException(DomainException):
    """Base exception for assignment-related errors."""

    pass


class AssignmentNotFoundError(NotFoundError, AssignmentException):
    """Raised when an assignment is not found."""

    def __init__(self, message: str = "Assignment not found"):
        super().__init__(message, code="ASSIGNMENT_NOT_FOUND")


class AssignmentAlreadyReturnedError(AssignmentException):
    """Raised when returning an assignment that was already returned."""

    def __init__(self, message: str = "Assignment has already been returned"):
        super().__init__(message, code="ASSIGNMENT_ALREADY_RETURNED")


class NothingAssignedError(AssignmentException):
    """Raised when every requested license was skipped."""

    def __init__(self, skipped):
        super().__init__(
            f"Assignment failed: {', '.join(skipped)}",
            code="NOTHING_ASSIGNED",
        )
        self.skipped = list(skipped)


class NothingReturnedError(AssignmentException):
    """Raised when no assignment could be returned."""

    def __init__(self, message: str = "No assignments could be returned"):
        super().__init__(message, code="NOTHING_RETURNED")


class AccountException(DomainException):
    """Base exception for account and authentication errors."""

    pass


class UserNotFoundError(NotFoundError, AccountException):
    """Raised when a user account is not found."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, code="USER_NOT_FOUND")


class UsernameTakenError(ConflictError, AccountException):
    """Raised when a username already exists."""

    def __init__(self, username: str):
        super().__init__(f'Username "{username}" is already taken.', code="USERNAME_TAKEN")


class InvalidCredentialsError(AccountException):
    """Raised when login credentials are wrong or the account is inactive."""

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class InvalidPasswordError(AccountException):
    """Raised when a new password violates the password policy."""

    def __init__(self, message: str = "Password must be at least 4 characters"):
        super().__init__(message, code="INVALID_PASSWORD")


class PermissionDeniedError(AccountException):
    """Raised when the actor lacks the admin role."""

    def __init__(self, message: str = "Admin role required"):
        super().__init__(message, code="PERMISSION_DENIED")


class SelfModificationError(AccountException):
    """Raised when an admin tries a forbidden action on their own account."""

    def __init__(self, message: str):
        super().__init__(message, code="SELF_MODIFICATION")


class ImportRejectedError(DomainException):
    """Raised when an uploaded CSV file is rejected before any row is read."""

    def __init__(self, message: str):
        super().__init__(message, code="IMPORT_REJECTED")
