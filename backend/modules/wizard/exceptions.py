"""
Wizard module exceptions.
"""

from shared.exceptions import ClassiflowError, NotFoundError, ValidationError


class WizardError(ClassiflowError):
    """Base exception for wizard errors."""

    pass


class IncompleteStepError(ValidationError):
    """Raised when a step is submitted before its required answers are given."""

    def __init__(self, message: str):
        super().__init__(message, code="INCOMPLETE_STEP")


class DataTypeNotSelectedError(ValidationError):
    """Raised when editing the details of a data type that is not selected."""

    def __init__(self, data_type: str):
        super().__init__(
            f"Data type is not selected: {data_type}",
            code="DATA_TYPE_NOT_SELECTED",
            details={"data_type": data_type},
        )


class InvalidInventoryFileError(ValidationError):
    """Raised when an uploaded inventory file is not valid JSON."""

    def __init__(self, message: str = "Invalid JSON file"):
        super().__init__(message, code="INVALID_INVENTORY_FILE")


class SubmissionInProgressError(WizardError):
    """Raised when a step is submitted while a previous submit is still running."""

    status_code = 409

    def __init__(self):
        super().__init__(
            "A submission is already in progress",
            code="SUBMISSION_IN_PROGRESS",
        )


class OrganizationNotFoundError(NotFoundError):
    """Raised when an organization does not exist."""

    def __init__(self, organization_id: str):
        super().__init__(
            f"Organization not found: {organization_id}",
            code="ORGANIZATION_NOT_FOUND",
            details={"organization_id": organization_id},
        )


class InvalidChoiceError(ValidationError):
    """Raised when a value is not one of the options offered for a field."""

    def __init__(self, field: str, value: str):
        super().__init__(
            f"Invalid value for {field}: {value!r}",
            code="INVALID_CHOICE",
            details={"field": field, "value": value},
            field=field,
        )
