"""
Wizard API endpoints.

Lets the web client load an organization's saved answers and submit
Step 2.
"""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_wizard_service
from api.middleware.auth import get_current_user
from modules.auth.models import UserProfile

from .controller import Step2Controller
from .interfaces import IWizardService
from .models import Step2Data

router = APIRouter()


@router.get("/{organization_id}/steps")
async def get_steps(
    organization_id: str,
    user: UserProfile = Depends(get_current_user),
    service: IWizardService = Depends(get_wizard_service),
) -> dict[str, Any]:
    """
    Get every step saved so far for an organization.
    """
    result = await service.get_result(organization_id)
    return result.model_dump(mode="json", by_alias=True, exclude_none=True)


@router.put("/{organization_id}/steps/2")
async def submit_second_step(
    organization_id: str,
    state: Step2Data,
    user: UserProfile = Depends(get_current_user),
    service: IWizardService = Depends(get_wizard_service),
):
    """
    Submit the Step 2 form state.

    The state goes through the Step 2 controller, so the saved payload is
    normalized the same way as an interactive submit. Missing answers
    are rejected with 422 before anything is saved.
    """
    saved = await service.get_result(organization_id)
    controller = Step2Controller.from_state(organization_id, service, state, saved)
    controller.validate()

    outcome = await controller.submit()
    if not outcome.success:
        return JSONResponse(status_code=500, content=outcome.model_dump(mode="json"))
    return outcome.model_dump(mode="json")
