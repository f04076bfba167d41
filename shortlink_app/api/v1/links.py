from typing import Optional
from fastapi import APIRouter, Depends, status
from shortlink_app.schemas.link import (
    LinkCreate,
    LinkResponse,
    LinkStats,
    PasswordSubmit,
    ResolveIntent,
    ResolveResponse,
)
from shortlink_app.services.link_service import LinkService
from shortlink_app.dependencies import get_link_service

router = APIRouter(prefix="/links", tags=["links"])


@router.post("/", response_model=LinkResponse, status_code=status.HTTP_201_CREATED)
async def create_link(
    link_data: LinkCreate,
    link_service: LinkService = Depends(get_link_service)
):
    """Create a new short link (random or custom code, optional expiry and password)"""
    record = await link_service.create(
        link_data.url,
        custom_code=link_data.custom_code,
        expires_at=link_data.expiration_date,
        password=link_data.password,
    )
    return LinkResponse(
        short_url=link_service.short_url(record.code),
        **record.model_dump(exclude={"password_hash"}),
    )


@router.get("/{code}", response_model=ResolveResponse, response_model_exclude_none=True)
async def check_link(
    code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Resolve without a password: tells the caller whether one is needed"""
    result = await link_service.resolve(code, intent=ResolveIntent.PROBE)
    return ResolveResponse.from_result(result)


@router.post("/{code}", response_model=ResolveResponse, response_model_exclude_none=True)
async def unlock_link(
    code: str,
    body: Optional[PasswordSubmit] = None,
    link_service: LinkService = Depends(get_link_service)
):
    """Resolve a password-protected link"""
    result = await link_service.authenticate(code, body.password if body else None)
    return ResolveResponse.from_result(result)


@router.get("/{code}/stats", response_model=LinkStats)
async def get_link_stats(
    code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """Get click statistics for a short link (never counts a click)"""
    return await link_service.get_stats(code)
