"""Admin route describing the configuration object."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from ..auth.auth_dependencies import require_admin_user
from .schema_describe import ConfigurationObjectDescriber

router = APIRouter(
    prefix="/api/schema",
    tags=["schema"],
    dependencies=[Depends(require_admin_user)],
)


class PicklistValueResponse(BaseModel):
    label: str
    value: str


class FieldDescribeResponse(BaseModel):
    name: str
    local_name: str
    label: str
    help_text: str | None = None
    picklist_values: list[PicklistValueResponse] = Field(default_factory=list)


class ObjectDescribeResponse(BaseModel):
    name: str
    local_name: str
    label: str
    label_plural: str
    key_prefix: str | None = None
    fields: dict[str, FieldDescribeResponse]


def get_describer(request: Request) -> ConfigurationObjectDescriber:
    try:
        return request.app.state.configuration_describer  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("ConfigurationObjectDescriber is not configured") from exc


@router.get("/configuration", response_model=ObjectDescribeResponse)
def describe_configuration_object(
    describer: ConfigurationObjectDescriber = Depends(get_describer),
) -> ObjectDescribeResponse:
    return ObjectDescribeResponse.model_validate(describer.describe())
