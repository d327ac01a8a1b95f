"""
Wizard data models.

Persisted payloads keep the camelCase keys used by the web client, so
every model here accepts both the alias and the Python field name and
is dumped with by_alias=True.
"""

from datetime import datetime, timezone
from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


DATA_TYPE_OPTIONS = [
    "Données personnelles",
    "Données d'identification",
    "Données de contact",
    "Données financières",
    "Données transactionnelles",
    "Préférences & interactions",
    "Comptes bancaires",
    "Crédits & prêts",
    "Cartes bancaires",
    "Assurances",
    "Placements / investissements",
    "Ressources humaines",
    "Structure organisationnelle",
    "Comptabilité interne",
    "Données fournisseurs / partenaires",
    "Scoring et notation de crédit",
    "Alertes AML / LCB-FT",
    "Sanctions & listes noires",
    "Audit & conformité",
    "Logs d'activité",
    "Données d'accès / authentification",
    "Paramétrages systèmes",
    "Données fiscales",
    "Données de conservation légale",
    "Campagnes marketing",
    "Segments clients",
    "Satisfaction & enquêtes",
]

SENSITIVITY_OPTIONS = {
    "none": "None",
    "low": "Low",
    "medium": "Medium",
    "high": "High",
}

BUSINESS_IMPACT_OPTIONS = {
    "none": "None",
    "low": "Low (minor inconvenience)",
    "medium": "Medium (moderate financial or operational impact)",
    "high": "High (major financial, reputational, or legal consequences)",
}

STORAGE_OPTIONS = ["Local files", "Shared drive", "External database"]

STEP2_TITLE = "Data Landscape"

Level = Literal["", "none", "low", "medium", "high"]
YesNo = Literal["", "yes", "no"]


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class DataTypeDetail(_Payload):
    """Assessment of one data type. A fresh record has every field empty."""

    sensitivity: Level = ""
    business_impact: Level = Field(default="", alias="businessImpact")
    has_regulatory: YesNo = Field(default="", alias="hasRegulatory")
    regulations: list[str] = Field(default_factory=list)
    storage: list[str] = Field(default_factory=list)
    storage_other: list[str] = Field(default_factory=list, alias="storageOther")


class Step2Data(_Payload):
    has_inventory: YesNo = Field(default="", alias="hasInventory")
    selected_data_types: list[str] = Field(
        default_factory=list, alias="selectedDataTypes"
    )
    custom_data_types: list[str] = Field(default_factory=list, alias="customDataTypes")
    data_type_details: dict[str, DataTypeDetail] = Field(
        default_factory=dict, alias="dataTypeDetails"
    )
    inventory_data: Optional[Any] = Field(None, alias="inventoryData")


class Step2Result(_Payload):
    """Finalized Step 2 payload as persisted."""

    step: Literal[2] = 2
    title: str = STEP2_TITLE
    data: Step2Data
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SelectionWithOther(_Payload):
    selected: list[str] = Field(default_factory=list)
    other: list[str] = Field(default_factory=list)


class Step1Answers(_Payload):
    """Step 1 answers. Only the regulations are read by later steps."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    regulations: SelectionWithOther = Field(default_factory=SelectionWithOther)


class Step1Data(_Payload):
    data: Step1Answers = Field(default_factory=Step1Answers)


class Step1Result(_Payload):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    step: Literal[1] = 1
    title: str = ""
    data: Step1Data = Field(default_factory=Step1Data)
    timestamp: Optional[datetime] = None


class MainResult(_Payload):
    """Everything saved for an organization, keyed by step."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    step1: Optional[Step1Result] = None
    step2: Optional[Step2Result] = None

    def carried_regulations(self) -> list[str]:
        """Regulations chosen in Step 1, offered as checkboxes in Step 2."""
        if self.step1 is None:
            return []
        regulations = self.step1.data.data.regulations
        return [*regulations.selected, *regulations.other]


class SubmitResult(BaseModel):
    """Outcome of submitting a step."""

    success: bool
    next_path: Optional[str] = None
    error: Optional[str] = None
    saved: Optional[dict[str, Any]] = None
