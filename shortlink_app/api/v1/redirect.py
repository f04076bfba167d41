from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, RedirectResponse
from shortlink_app.schemas.link import ResolveIntent, ResolveResponse
from shortlink_app.services.link_service import LinkService
from shortlink_app.dependencies import get_link_service

router = APIRouter(tags=["redirect"])


@router.get("/{code}")
async def redirect_to_target(
    code: str,
    link_service: LinkService = Depends(get_link_service)
):
    """
    Follow a short link.

    Unprotected links redirect (302) and count the click. Protected links
    answer with ``requires_password`` and count nothing; the client then
    POSTs the password to ``/api/v1/links/{code}``.
    """
    result = await link_service.resolve(code, intent=ResolveIntent.PROBE)

    if result.requires_password:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=ResolveResponse.from_result(result).model_dump(exclude_none=True),
        )

    return RedirectResponse(url=result.target_url, status_code=status.HTTP_302_FOUND)
