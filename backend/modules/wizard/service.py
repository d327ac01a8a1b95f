"""
Wizard service implementation.

Reads and writes the saved step results of an organization.
"""

import logging
from typing import Any, Optional

from .exceptions import OrganizationNotFoundError
from .interfaces import IWizardService
from .models import MainResult, Step2Result
from .repository import StepRepository

logger = logging.getLogger(__name__)


class WizardService(IWizardService):
    """Step persistence backed by the organizations table."""

    def __init__(self, repository: StepRepository):
        self._repo = repository

    async def get_result(self, organization_id: str) -> MainResult:
        raw = self._repo.get_result(organization_id)
        if raw is None:
            raise OrganizationNotFoundError(organization_id)
        return MainResult.model_validate(raw)

    async def save_second_step(
        self, organization_id: str, result: Step2Result
    ) -> dict[str, Any]:
        payload = result.model_dump(mode="json", by_alias=True, exclude_none=True)
        saved: Optional[dict[str, Any]] = self._repo.save_step(
            organization_id, "step2", payload
        )
        if saved is None:
            raise OrganizationNotFoundError(organization_id)

        logger.debug(f"Stored step 2 for organization {organization_id}")
        return saved
