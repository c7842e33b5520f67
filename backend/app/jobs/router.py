"""
Jobs page routes
"""
from fastapi import APIRouter, Depends, Query, status

from app.jobs.page import JobsPage
from app.jobs.schemas import JobDraft, JobStatusUpdate, JobsView
from app.pages.dependencies import form_failure_status, mounted_page, redirect_for, render

router = APIRouter(prefix="/api/v1/jobs", tags=["Jobs"])

jobs_page = mounted_page(JobsPage)


@router.get("/", response_model=JobsView, response_model_exclude_none=True)
async def list_jobs(
    search: str = Query("", description="Matches title, department or location"),
    page: JobsPage = Depends(jobs_page),
):
    """Jobs newest first, filtered by the search text"""
    redirect = redirect_for(page)
    if redirect:
        return redirect
    page.jobs.search = search
    return render(page.view())


@router.post("/", response_model=JobsView, status_code=status.HTTP_201_CREATED)
async def create_job(
    draft: JobDraft,
    page: JobsPage = Depends(jobs_page),
):
    """Submit the create-job form"""
    redirect = redirect_for(page)
    if redirect:
        return redirect
    page.form.open()
    page.form.update(**draft.model_dump())
    if await page.create_job():
        return render(page.view(), status.HTTP_201_CREATED)
    return render(page.view(), form_failure_status(page.form))


@router.patch("/{job_id}/status", response_model=JobsView)
async def update_job_status(
    job_id: str,
    update: JobStatusUpdate,
    page: JobsPage = Depends(jobs_page),
):
    """Open or close a job posting"""
    redirect = redirect_for(page)
    if redirect:
        return redirect
    if await page.set_status(job_id, update.status):
        return render(page.view())
    return render(page.view(), status.HTTP_400_BAD_REQUEST)
