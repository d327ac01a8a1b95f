"""
Step 2 ("Data Landscape") form controller.

Holds the whole step as one in-memory form state and applies every
field-level interaction to it. The state follows two rules:

- the keys of data_type_details are exactly the selected data types, so
  deselecting a type always drops its detail record;
- the inventory branch and the data-type branch are exclusive: answering
  "yes" clears all data-type answers, answering "no" clears the inventory.

Blank entries in the editable lists are kept while editing and only
stripped when the result is built for submission.
"""

import json
import logging
from datetime import datetime
from typing import Any, Optional, Union

from .exceptions import (
    DataTypeNotSelectedError,
    IncompleteStepError,
    InvalidChoiceError,
    InvalidInventoryFileError,
    SubmissionInProgressError,
)
from .interfaces import IStepPersistence
from .models import (
    BUSINESS_IMPACT_OPTIONS,
    DATA_TYPE_OPTIONS,
    SENSITIVITY_OPTIONS,
    STORAGE_OPTIONS,
    DataTypeDetail,
    MainResult,
    Step2Data,
    Step2Result,
    SubmitResult,
)

logger = logging.getLogger(__name__)

INVENTORY_ANSWERS = ("yes", "no")


def _non_blank(items: list[str]) -> list[str]:
    return [item for item in items if item.strip() != ""]


class Step2Controller:
    """
    Form state and interactions for Step 2 of the onboarding wizard.

    Args:
        organization_id: Organization the answers belong to
        persistence: Where submit() saves the finished step
        initial: Previously saved results for the organization, if any.
            Step 1 supplies the carried-over regulations, Step 2 seeds
            the form.
    """

    def __init__(
        self,
        organization_id: str,
        persistence: IStepPersistence,
        initial: Optional[MainResult] = None,
    ):
        self.organization_id = organization_id
        self._persistence = persistence
        self._submitting = False

        initial = initial or MainResult()
        self._carried = initial.carried_regulations()

        saved = initial.step2.data if initial.step2 else Step2Data()
        self._saved_details = {
            key: detail.model_copy(deep=True)
            for key, detail in saved.data_type_details.items()
        }

        self.has_inventory: str = saved.has_inventory or ""
        self.selected_data_types: list[str] = list(
            dict.fromkeys(saved.selected_data_types)
        )
        self.custom_data_types: list[str] = list(saved.custom_data_types)
        # Details for types that are no longer selected are dropped
        self.data_type_details: dict[str, DataTypeDetail] = {
            data_type: self._fresh_detail(data_type)
            for data_type in self.selected_data_types
        }
        self.inventory_data: Optional[Any] = saved.inventory_data

    @classmethod
    def from_state(
        cls,
        organization_id: str,
        persistence: IStepPersistence,
        state: Step2Data,
        saved: Optional[MainResult] = None,
    ) -> "Step2Controller":
        """Build a controller around a form state edited elsewhere."""
        step1 = saved.step1 if saved else None
        return cls(
            organization_id,
            persistence,
            MainResult(step1=step1, step2=Step2Result(data=state)),
        )

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def carried_regulations(self) -> list[str]:
        return list(self._carried)

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    def detail(self, data_type: str) -> DataTypeDetail:
        """
        Detail record of a selected data type.

        Raises:
            DataTypeNotSelectedError: If the data type is not selected
        """
        try:
            return self.data_type_details[data_type]
        except KeyError:
            raise DataTypeNotSelectedError(data_type)

    def custom_regulations(self, data_type: str) -> list[str]:
        """Regulations of a data type that were not carried over from Step 1."""
        return [
            regulation
            for regulation in self.detail(data_type).regulations
            if regulation not in self._carried
        ]

    # -------------------------------------------------------------------------
    # Branch selection
    # -------------------------------------------------------------------------

    def set_has_inventory(self, value: str) -> None:
        if value not in INVENTORY_ANSWERS:
            raise InvalidChoiceError("hasInventory", value)

        self.has_inventory = value
        if value == "yes":
            self.selected_data_types = []
            self.custom_data_types = []
            self.data_type_details = {}
        else:
            self.inventory_data = None

    # -------------------------------------------------------------------------
    # Data type selection
    # -------------------------------------------------------------------------

    def toggle_data_type(self, data_type: str, checked: bool) -> None:
        if not data_type.strip():
            return

        if checked:
            if data_type in self.selected_data_types:
                return
            self.selected_data_types.append(data_type)
            self.data_type_details[data_type] = self._fresh_detail(data_type)
        else:
            self._deselect(data_type)

    def add_custom_data_type(self) -> None:
        self.custom_data_types.append("")

    def update_custom_data_type(self, index: int, value: str) -> None:
        """
        Edit a custom data type in place.

        A selected entry keeps its selection and detail record under the
        new name. If the new name is blank or already selected, the old
        entry is deselected instead.
        """
        previous = self.custom_data_types[index]
        self.custom_data_types[index] = value

        if previous not in self.selected_data_types or self._still_offered(previous):
            return

        if not value.strip() or value in self.selected_data_types:
            self._deselect(previous)
            return

        position = self.selected_data_types.index(previous)
        self.selected_data_types[position] = value
        self.data_type_details[value] = self.data_type_details.pop(previous)

    def remove_custom_data_type(self, index: int) -> None:
        removed = self.custom_data_types.pop(index)
        if not self._still_offered(removed):
            self._deselect(removed)

    # -------------------------------------------------------------------------
    # Detail fields
    # -------------------------------------------------------------------------

    def set_sensitivity(self, data_type: str, value: str) -> None:
        if value not in SENSITIVITY_OPTIONS:
            raise InvalidChoiceError("sensitivity", value)
        self.detail(data_type).sensitivity = value

    def set_business_impact(self, data_type: str, value: str) -> None:
        if value not in BUSINESS_IMPACT_OPTIONS:
            raise InvalidChoiceError("businessImpact", value)
        self.detail(data_type).business_impact = value

    def set_has_regulatory(self, data_type: str, value: str) -> None:
        if value not in ("yes", "no"):
            raise InvalidChoiceError("hasRegulatory", value)
        self.detail(data_type).has_regulatory = value

    def toggle_carried_regulation(
        self, data_type: str, regulation: str, checked: bool
    ) -> None:
        if regulation not in self._carried:
            raise InvalidChoiceError("regulations", regulation)

        detail = self.detail(data_type)
        if checked:
            if regulation not in detail.regulations:
                detail.regulations.append(regulation)
        else:
            detail.regulations = [r for r in detail.regulations if r != regulation]

    def add_custom_regulation(self, data_type: str) -> None:
        self.detail(data_type).regulations.append("")

    def update_custom_regulation(self, data_type: str, index: int, value: str) -> None:
        """Edit the index-th custom regulation (counting custom entries only)."""
        detail = self.detail(data_type)
        detail.regulations[self._custom_position(detail, index)] = value

    def remove_custom_regulation(self, data_type: str, index: int) -> None:
        detail = self.detail(data_type)
        del detail.regulations[self._custom_position(detail, index)]

    def toggle_storage(self, data_type: str, option: str, checked: bool) -> None:
        if option not in STORAGE_OPTIONS:
            raise InvalidChoiceError("storage", option)

        detail = self.detail(data_type)
        if checked:
            if option not in detail.storage:
                detail.storage.append(option)
        else:
            detail.storage = [s for s in detail.storage if s != option]

    def add_storage_other(self, data_type: str) -> None:
        self.detail(data_type).storage_other.append("")

    def update_storage_other(self, data_type: str, index: int, value: str) -> None:
        self.detail(data_type).storage_other[index] = value

    def remove_storage_other(self, data_type: str, index: int) -> None:
        del self.detail(data_type).storage_other[index]

    # -------------------------------------------------------------------------
    # Inventory import
    # -------------------------------------------------------------------------

    def import_inventory(self, content: Union[str, bytes]) -> Any:
        """
        Replace the inventory with the parsed contents of an uploaded file.

        Raises:
            InvalidInventoryFileError: If the content is not valid JSON.
                The current inventory is left as it was.
        """
        try:
            parsed = json.loads(content)
        except ValueError as e:
            logger.warning(f"Rejected inventory upload for {self.organization_id}: {e}")
            raise InvalidInventoryFileError()

        self.inventory_data = parsed
        return parsed

    # -------------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------------

    def validate(self) -> None:
        """
        Check the answers required before the step can be saved.

        Raises:
            IncompleteStepError: With the message to show the user
        """
        if not self.has_inventory:
            raise IncompleteStepError(
                "Please answer whether you have an up-to-date inventory"
            )
        if self.has_inventory == "no" and not self.selected_data_types:
            raise IncompleteStepError("Please select at least one data type")
        if self.has_inventory == "yes" and self.inventory_data is None:
            raise IncompleteStepError("Please upload your data inventory JSON file")

    def build_result(self, now: Optional[datetime] = None) -> Step2Result:
        """
        Normalize the form state into the payload that gets saved.

        Only the answered branch is kept: data-type answers are emptied
        on "yes" and the inventory is dropped otherwise.
        """
        if self.has_inventory == "yes":
            data = Step2Data(has_inventory="yes", inventory_data=self.inventory_data)
            return self._wrap(data, now)

        details = {
            data_type: detail.model_copy(
                update={
                    "regulations": _non_blank(detail.regulations),
                    "storage": list(detail.storage),
                    "storage_other": _non_blank(detail.storage_other),
                }
            )
            for data_type, detail in self.data_type_details.items()
        }
        data = Step2Data(
            has_inventory=self.has_inventory,
            selected_data_types=list(self.selected_data_types),
            custom_data_types=_non_blank(self.custom_data_types),
            data_type_details=details,
            inventory_data=None,
        )
        return self._wrap(data, now)

    @staticmethod
    def _wrap(data: Step2Data, now: Optional[datetime]) -> Step2Result:
        if now is None:
            return Step2Result(data=data)
        return Step2Result(data=data, timestamp=now)

    async def submit(self) -> SubmitResult:
        """
        Validate, normalize and save the step.

        Nothing is sent to persistence when validation fails. A failed
        save leaves the form state untouched so it can be resubmitted.

        Raises:
            SubmissionInProgressError: If a previous submit has not finished
        """
        if self._submitting:
            raise SubmissionInProgressError()

        try:
            self.validate()
        except IncompleteStepError as e:
            return SubmitResult(success=False, error=e.message)

        result = self.build_result()
        self._submitting = True
        try:
            saved = await self._persistence.save_second_step(
                self.organization_id, result
            )
        except Exception as e:
            logger.exception(f"Failed to save step 2 for {self.organization_id}")
            reason = getattr(e, "message", None) or str(e)
            return SubmitResult(success=False, error=f"Failed to save step 2: {reason}")
        finally:
            self._submitting = False

        logger.info(f"Saved step 2 for {self.organization_id}")
        return SubmitResult(
            success=True,
            next_path=f"/projects/{self.organization_id}/step3",
            saved=saved,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _fresh_detail(self, data_type: str) -> DataTypeDetail:
        saved = self._saved_details.get(data_type)
        return saved.model_copy(deep=True) if saved else DataTypeDetail()

    def _deselect(self, data_type: str) -> None:
        self.selected_data_types = [
            item for item in self.selected_data_types if item != data_type
        ]
        self.data_type_details.pop(data_type, None)

    def _still_offered(self, data_type: str) -> bool:
        return data_type in DATA_TYPE_OPTIONS or data_type in self.custom_data_types

    def _custom_position(self, detail: DataTypeDetail, index: int) -> int:
        positions = [
            i
            for i, regulation in enumerate(detail.regulations)
            if regulation not in self._carried
        ]
        return positions[index]
