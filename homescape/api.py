from fastapi import FastAPI, APIRouter, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from typing import List, Optional
from pathlib import Path
from dotenv import load_dotenv
import asyncio
import json

load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env", override=False)

from .db.dataset import listings_file
from .db.favorites import get_favorites_store
from .db.repo import get_repository
from .errors import HomescapeError, ValidationFailure
from .models.comparison import ComparisonItemRequest, ComparisonSessionResponse
from .models.favorite import FavoriteCreate, FavoriteListResponse
from .models.filters import FilterCriteria
from .models.listing import ListingListResponse
from .models.messaging import ContactRequest
from .services.comparison import comparison_table, get_sessions
from .services.contact_service import get_contact_service
from .services.sms_service import send_sms
from .utils.io import file_sha256
from .utils.logging import get_logger

LOGGER = get_logger("api")

app = FastAPI(title="Homescape")
router = APIRouter(prefix="/api")


@app.exception_handler(HomescapeError)
async def homescape_error_handler(request: Request, exc: HomescapeError):
    content = {"detail": exc.message}
    if isinstance(exc, ValidationFailure) and exc.errors:
        content["errors"] = exc.errors
    if exc.status_code >= 500:
        LOGGER.warning("request_failed path=%s status=%s error=%s", request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=content)


# ----------------------------------------------------------------------
# Listings

@router.get("/properties")
def list_props(
    q: Optional[str] = Query(None),
    price_min: Optional[float] = Query(None),
    price_max: Optional[float] = Query(None),
    bedrooms: Optional[float] = Query(None),
    bathrooms: Optional[float] = Query(None),
    property_type: Optional[List[str]] = Query(None),
):
    criteria = FilterCriteria(
        search_query=q,
        price_min=price_min,
        price_max=price_max,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        property_types=property_type or [],
    )
    rows = get_repository().filter_listings(criteria)
    return jsonable_encoder(ListingListResponse(items=rows, total=len(rows)))

@router.get("/property-types")
def list_property_types():
    return {"items": get_repository().property_types()}

@router.get("/properties/{property_id}")
def get_prop(property_id: int):
    return jsonable_encoder(get_repository().get_listing(property_id))


# ----------------------------------------------------------------------
# Favorites

@router.get("/favorites")
async def list_favorites():
    items = await get_favorites_store().get_all()
    return jsonable_encoder(FavoriteListResponse(items=items, total=len(items)))

@router.get("/favorites/count")
async def favorites_count():
    return {"count": await get_favorites_store().count()}

@router.get("/favorites/{property_id}")
async def get_favorite(property_id: int):
    return jsonable_encoder(await get_favorites_store().get_by_id(property_id))

@router.post("/favorites", status_code=201)
async def create_favorite(req: FavoriteCreate):
    get_repository().get_listing(req.property_id)
    return jsonable_encoder(await get_favorites_store().create(req))

@router.delete("/favorites/{property_id}")
async def delete_favorite(property_id: int):
    return {"success": await get_favorites_store().delete(property_id)}

@router.delete("/favorites")
async def clear_favorites():
    return {"success": await get_favorites_store().clear()}


# ----------------------------------------------------------------------
# Comparison

def _session_payload(session_id: str) -> dict:
    comparison = get_sessions().get(session_id)
    items = comparison.to_listings(get_repository().list_listings())
    payload = ComparisonSessionResponse(
        session_id=session_id,
        ids=comparison.ids,
        items=items,
        table=comparison_table(items),
    )
    return jsonable_encoder(payload)

@router.post("/comparisons", status_code=201)
async def create_comparison():
    return {"session_id": get_sessions().create(), "ids": []}

@router.get("/comparisons/{session_id}")
async def get_comparison(session_id: str):
    return _session_payload(session_id)

@router.post("/comparisons/{session_id}/items")
async def add_to_comparison(session_id: str, req: ComparisonItemRequest):
    comparison = get_sessions().get(session_id)
    get_repository().get_listing(req.property_id)
    result = comparison.add(req.property_id)
    return {**result.model_dump(), "ids": comparison.ids}

@router.post("/comparisons/{session_id}/suggest")
async def suggest_for_comparison(session_id: str):
    comparison = get_sessions().get(session_id)
    candidate = comparison.suggest_next(get_repository().list_listings())
    if candidate is None:
        return {"accepted": False, "property": None, "ids": comparison.ids}
    result = comparison.add(candidate.id)
    return jsonable_encoder({**result.model_dump(), "property": candidate, "ids": comparison.ids})

@router.delete("/comparisons/{session_id}/items/{property_id}")
async def remove_from_comparison(session_id: str, property_id: int):
    comparison = get_sessions().get(session_id)
    comparison.remove(property_id)
    return {"ids": comparison.ids}

@router.delete("/comparisons/{session_id}")
async def close_comparison(session_id: str):
    get_sessions().close(session_id)
    return {"success": True}


# ----------------------------------------------------------------------
# Messaging

@router.post("/sms")
async def sms_route(request: Request):
    body = await request.body()
    try:
        payload = json.loads(body)
    except ValueError:
        return JSONResponse(status_code=400, content={"success": False, "error": "Invalid JSON in request body"})
    try:
        result = await asyncio.to_thread(send_sms, payload)
    except HomescapeError as exc:
        content = {"success": False, "error": exc.message}
        if getattr(exc, "code", None) is not None:
            content["code"] = exc.code
        return JSONResponse(status_code=exc.status_code, content=content)
    except Exception:
        LOGGER.exception("sms_route_failed")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Internal server error occurred while processing SMS request"},
        )
    return result.model_dump()

@router.post("/contact", status_code=201)
async def contact_route(req: ContactRequest):
    receipt = await get_contact_service().submit(req)
    return jsonable_encoder(receipt)


@router.get("/health")
def health():
    return {"status": "ok", "dataset": listings_file(), "dataset_sha256": file_sha256(listings_file())}

app.include_router(router)
