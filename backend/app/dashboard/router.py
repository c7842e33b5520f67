"""
Dashboard route
"""
from fastapi import APIRouter, Depends

from app.dashboard.page import DashboardPage
from app.dashboard.schemas import DashboardView
from app.pages.dependencies import mounted_page, redirect_for, render

router = APIRouter(prefix="/api/v1/dashboard", tags=["Dashboard"])

dashboard_page = mounted_page(DashboardPage)


@router.get("/", response_model=DashboardView)
async def dashboard(page: DashboardPage = Depends(dashboard_page)):
    """Recruitment overview for the signed-in user"""
    redirect = redirect_for(page)
    if redirect:
        return redirect
    return render(page.view())
