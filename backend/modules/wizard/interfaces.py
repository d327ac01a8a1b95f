"""
Wizard module interfaces.
"""

from typing import Any, Protocol, runtime_checkable

from .models import MainResult, Step2Result


@runtime_checkable
class IStepPersistence(Protocol):
    """
    Where a finished step is saved.

    The Step 2 controller only knows this contract, so it can be driven
    against an in-memory fake.
    """

    async def save_second_step(
        self, organization_id: str, result: Step2Result
    ) -> dict[str, Any]:
        """
        Persist the Step 2 payload for an organization.

        Returns:
            The saved record

        Raises:
            OrganizationNotFoundError: If the organization does not exist
        """
        ...


@runtime_checkable
class IWizardService(IStepPersistence, Protocol):
    """Interface for reading and writing wizard results."""

    async def get_result(self, organization_id: str) -> MainResult:
        """
        Get everything saved so far for an organization.

        Raises:
            OrganizationNotFoundError: If the organization does not exist
        """
        ...
