"""
Candidates page routes
"""
from fastapi import APIRouter, Depends, Query, status

from app.candidates.page import CandidatesPage
from app.candidates.schemas import CandidateDraft, CandidatesView
from app.pages.dependencies import form_failure_status, mounted_page, redirect_for, render

router = APIRouter(prefix="/api/v1/candidates", tags=["Candidates"])

candidates_page = mounted_page(CandidatesPage)


@router.get("/", response_model=CandidatesView, response_model_exclude_none=True)
async def list_candidates(
    search: str = Query("", description="Matches name, email or location"),
    page: CandidatesPage = Depends(candidates_page),
):
    """Candidates newest first, filtered by the search text"""
    redirect = redirect_for(page)
    if redirect:
        return redirect
    page.candidates.search = search
    return render(page.view())


@router.post("/", response_model=CandidatesView, status_code=status.HTTP_201_CREATED)
async def create_candidate(
    draft: CandidateDraft,
    page: CandidatesPage = Depends(candidates_page),
):
    """Submit the add-candidate form"""
    redirect = redirect_for(page)
    if redirect:
        return redirect
    page.form.open()
    page.form.update(**draft.model_dump())
    if await page.create_candidate():
        return render(page.view(), status.HTTP_201_CREATED)
    return render(page.view(), form_failure_status(page.form))
