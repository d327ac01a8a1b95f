"""
Auth form schemas.

Shape validation for the form-encoded auth actions. Field names follow
the HTML form (camelCase) so errors can be rendered next to the input
they belong to.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import FormValidationError


FIELD_LABELS = {
    "firstName": "First name",
    "lastName": "Last name",
    "password": "Password",
}

INVALID_EMAIL_MESSAGE = "Invalid email address"


class _Form(BaseModel):
    # Unknown fields (e.g. an injected "role") are dropped, never stored
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LoginForm(_Form):
    email: EmailStr
    password: str = Field(min_length=8)


class ProfileForm(_Form):
    first_name: str = Field(alias="firstName", min_length=2)
    last_name: str = Field(alias="lastName", min_length=2)
    email: EmailStr


class CreateAccountForm(ProfileForm):
    password: str = Field(min_length=8)


FormT = TypeVar("FormT", bound=_Form)


def _message_for(field: str, error: dict[str, Any]) -> str:
    if field == "email":
        return INVALID_EMAIL_MESSAGE
    if error["type"] == "missing":
        return "Required"
    if error["type"] == "string_too_short":
        label = FIELD_LABELS.get(field, field)
        return f"{label} must be at least {error['ctx']['min_length']} characters"
    return error["msg"]


def parse_form(form_cls: type[FormT], data: dict[str, Any]) -> FormT:
    """
    Validate raw form fields into a form model.

    Raises:
        FormValidationError: With every failing field and its messages
    """
    try:
        return form_cls.model_validate(data)
    except PydanticValidationError as e:
        fields: dict[str, list[str]] = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "_form"
            fields.setdefault(field, []).append(_message_for(field, error))
        raise FormValidationError(fields)
