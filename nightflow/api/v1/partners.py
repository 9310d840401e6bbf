# nightflow/api/v1/partners.py
"""Partner split editor helpers.

Stateless: the client posts the current rows and gets the edited rows back,
so the event form can preview a rebalance before submitting.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from nightflow.api.deps import get_current_user
from nightflow.schemas.partner import (
    AddPartnerRequest,
    Partner,
    PartnerRowUpdate,
    PartnerSplit,
    RebalanceRequest,
    RemovePartnerRequest,
    SplitCheckRequest,
)
from nightflow.services import partners as split

router = APIRouter()


def _result(partners: List[Partner]) -> PartnerSplit:
    total = split.split_total(partners)
    return PartnerSplit(partners=partners, total=total, valid=total == 100)


def _check_index(partners: List[Partner], index: int) -> None:
    if index >= len(partners):
        raise HTTPException(status_code=422, detail=f"partner index out of range: {index}")


@router.post("/rebalance", response_model=PartnerSplit)
def rebalance(body: RebalanceRequest, _=Depends(get_current_user)):
    return _result(split.rebalance(body.partners, body.edited_name, body.new_percentage))


@router.post("/update", response_model=PartnerSplit)
def update_row(body: PartnerRowUpdate, _=Depends(get_current_user)):
    _check_index(body.partners, body.index)
    return _result(split.update_partner(body.partners, body.index, body.field, body.value))


@router.post("/add", response_model=PartnerSplit)
def add_row(body: AddPartnerRequest, _=Depends(get_current_user)):
    return _result(split.add_partner(body.partners, body.name))


@router.post("/remove", response_model=PartnerSplit)
def remove_row(body: RemovePartnerRequest, _=Depends(get_current_user)):
    _check_index(body.partners, body.index)
    return _result(split.remove_partner(body.partners, body.index))


@router.post("/validate", response_model=PartnerSplit)
def validate(body: SplitCheckRequest, _=Depends(get_current_user)):
    split.validate_split(body.partners)
    return _result(body.partners)
