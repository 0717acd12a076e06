from fastapi import APIRouter, Depends

from app.modules.auth.dependencies import authorize, get_storage
from app.modules.auth.policy import AccessContext
from app.schemas.report import FinanceReport, OverviewReport
from app.services.report_service import ReportService
from app.storage import Storage

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/finance", response_model=FinanceReport)
async def finance_report(
    ctx: AccessContext = Depends(authorize("reports", "finance")),
    storage: Storage = Depends(get_storage)
):
    """Income, expenses and net (admin, finance)"""
    return await ReportService(storage).generate_finance_report()


@router.get("/overview", response_model=OverviewReport)
async def overview_report(
    ctx: AccessContext = Depends(authorize("reports", "overview")),
    storage: Storage = Depends(get_storage)
):
    """Counts across learning, projects and finance (admin)"""
    return await ReportService(storage).generate_overview_report()
