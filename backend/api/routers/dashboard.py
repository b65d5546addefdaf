from fastapi import APIRouter

from api.deps import SessionDep
from core.utils import start_of_utc_day
from crud import dashboard as crud_dashboard
from schemas.dashboard import DashboardSummary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummary)
def get_summary(db: SessionDep):
    """Today's sales and open debt totals per currency."""
    return crud_dashboard.get_summary(db, start_of_utc_day())
