"""
Caller address endpoints.

``/`` renders HTML unless the request asks for JSON; ``/api`` and anything
below it always return JSON.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates

from myip.config import PACKAGE_DIR, settings
from myip.dependencies import get_fetch_service
from myip.application.fetch_service import FetchService
from myip.schemas.api_schemas import AddressInfoResponse
from myip.routers.negotiation import client_ip, wants_json

router = APIRouter()

# JSON is also requested through Content-Type, which clients send on POST
ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))


async def render_address_info(request: Request, service: FetchService):
    ip = client_ip(request)
    response = await service.fetch(ip, timeout=settings.REQUEST_TIMEOUT)
    # response.error was already reported through the service's error sink

    if wants_json(request):
        payload = AddressInfoResponse.from_fetch(response)
        return JSONResponse(content=payload.model_dump(by_alias=True))

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "ip": response.address,
            "count_call": response.call_count,
            "rdap": response.record,
            "has_rdap": not response.record.is_empty,
        },
    )


@router.api_route("/", methods=ANY_METHOD, response_model=None)
async def index(request: Request, service: FetchService = Depends(get_fetch_service)):
    """
    Show the caller address, its request count and registry data.
    """
    return await render_address_info(request, service)


@router.api_route("/api", methods=ANY_METHOD, response_model=None)
async def api_root(request: Request, service: FetchService = Depends(get_fetch_service)):
    """
    Same data as ``/`` as JSON.
    """
    return await render_address_info(request, service)


@router.api_route("/api/{subpath:path}", methods=ANY_METHOD, response_model=None)
async def api_subpath(subpath: str, request: Request, service: FetchService = Depends(get_fetch_service)):
    return await render_address_info(request, service)
