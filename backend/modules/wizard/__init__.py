"""
Onboarding wizard module.

Holds the questionnaire payload models, the Step 2 form controller and
per-organization step persistence.

Public API:
- IWizardService / IStepPersistence: Interfaces for step storage
- Step2Controller: Step 2 form state and submit pipeline
- Payload models: DataTypeDetail, Step2Data, Step2Result, MainResult
"""

from .interfaces import IStepPersistence, IWizardService
from .controller import Step2Controller
from .models import (
    DATA_TYPE_OPTIONS,
    STORAGE_OPTIONS,
    DataTypeDetail,
    Step2Data,
    Step2Result,
    Step1Result,
    MainResult,
    SubmitResult,
)
from .exceptions import (
    WizardError,
    IncompleteStepError,
    DataTypeNotSelectedError,
    InvalidInventoryFileError,
    InvalidChoiceError,
    SubmissionInProgressError,
    OrganizationNotFoundError,
)

__all__ = [
    # Interfaces
    "IStepPersistence",
    "IWizardService",
    # Controller
    "Step2Controller",
    # Models
    "DATA_TYPE_OPTIONS",
    "STORAGE_OPTIONS",
    "DataTypeDetail",
    "Step2Data",
    "Step2Result",
    "Step1Result",
    "MainResult",
    "SubmitResult",
    # Exceptions
    "WizardError",
    "IncompleteStepError",
    "DataTypeNotSelectedError",
    "InvalidInventoryFileError",
    "InvalidChoiceError",
    "SubmissionInProgressError",
    "OrganizationNotFoundError",
]
