"""
Page controllers as FastAPI dependencies
"""
from typing import AsyncGenerator, Callable, Optional, Type

from fastapi import Depends
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel
from sqlalchemy.orm import sessionmaker
from starlette import status

from app.auth.dependencies import get_session_context, get_session_factory
from app.auth.session import SessionContext
from app.pages.controller import PageController, RecordingNavigator
from app.pages.forms import CreateForm
from app.store.client import StoreClient


def get_store(
    context: SessionContext = Depends(get_session_context),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> StoreClient:
    """Store client acting as whoever the request's session belongs to"""
    return StoreClient(session_factory, lambda: context.user_id)


def mounted_page(page_cls: Type[PageController]) -> Callable:
    """Build a dependency that mounts `page_cls` for the duration of a request"""

    async def dependency(
        context: SessionContext = Depends(get_session_context),
        store: StoreClient = Depends(get_store),
    ) -> AsyncGenerator[PageController, None]:
        page = page_cls(context, store, RecordingNavigator())
        await page.mount()
        try:
            yield page
        finally:
            await page.unmount()

    return dependency


def redirect_for(page: PageController) -> Optional[RedirectResponse]:
    """Redirect the client if the page navigated away while mounting"""
    target = page.navigator.redirect_to
    if target is None:
        return None
    return RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)


def render(view: BaseModel, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """View state as JSON; optional fields that are absent are left out"""
    return JSONResponse(status_code=status_code, content=view.model_dump(mode="json", exclude_none=True))


def form_failure_status(form: CreateForm) -> int:
    if form.error_kind == "validation":
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_400_BAD_REQUEST
