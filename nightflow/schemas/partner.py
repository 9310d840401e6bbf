from typing import Any, List, Literal

from pydantic import BaseModel, Field


class Partner(BaseModel):
    name: str = ""
    percentage: int = 0

    model_config = {"from_attributes": True}


# ---- split editor requests (form helpers) ----

class RebalanceRequest(BaseModel):
    partners: List[Partner]
    edited_name: str
    # raw form value; coerced server-side so intermediate typing states never fail
    new_percentage: Any = None


class PartnerRowUpdate(BaseModel):
    partners: List[Partner]
    index: int = Field(ge=0)
    field: Literal["name", "percentage"]
    value: Any = None


class AddPartnerRequest(BaseModel):
    partners: List[Partner]
    name: str = ""


class RemovePartnerRequest(BaseModel):
    partners: List[Partner]
    index: int = Field(ge=0)


class SplitCheckRequest(BaseModel):
    partners: List[Partner]


class PartnerSplit(BaseModel):
    partners: List[Partner]
    total: int
    valid: bool
