from typing import List

from fastapi import APIRouter, Depends

from nightflow.api.deps import get_current_user, get_repository
from nightflow.repository.base import EventRepository
from nightflow.schemas.report import DashboardSummary, EventReportRow
from nightflow.services.reports import dashboard_summary, event_reports

router = APIRouter()


@router.get("/reports", response_model=List[EventReportRow])
def list_reports(repo: EventRepository = Depends(get_repository), _=Depends(get_current_user)):
    return event_reports(repo)


@router.get("/dashboard", response_model=DashboardSummary)
def dashboard(repo: EventRepository = Depends(get_repository), _=Depends(get_current_user)):
    return dashboard_summary(repo)
