# nightflow/api/v1/router.py
from fastapi import APIRouter
from nightflow.api.v1 import (
    auth,
    events,
    entries,
    reports,
    partners,
)

api_router = APIRouter()

api_router.include_router(auth.router,     prefix="/auth",     tags=["auth"])
api_router.include_router(events.router,   prefix="/events",   tags=["events"])
api_router.include_router(entries.router,  prefix="/entries",  tags=["entries"])
api_router.include_router(reports.router,                      tags=["reports"])
api_router.include_router(partners.router, prefix="/partners", tags=["partners"])
