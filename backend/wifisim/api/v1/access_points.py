"""Access point catalogue API endpoints."""

from fastapi import APIRouter, HTTPException, Query
from typing import List, Optional

from wifisim.schemas.simulation import ApInstantiateRequest, ApInstantiateResponse, ApSpecSchema
from wifisim.services import ap_library

router = APIRouter()


@router.get("/catalogue", response_model=List[ApSpecSchema])
async def list_catalogue(
    brand: Optional[str] = Query(None, description="Filter by brand (case-insensitive)")
):
    """List built-in AP models."""
    return ap_library.get_catalogue(brand)


@router.get("/catalogue/brands", response_model=List[str])
async def list_brands():
    return ap_library.get_brands()


@router.post("/catalogue/instantiate", response_model=ApInstantiateResponse, status_code=201)
async def instantiate_access_point(request: ApInstantiateRequest):
    """Create an access point from a catalogue entry at a floor-plan position."""
    spec = ap_library.find_spec(request.brand, request.model)
    if spec is None:
        raise HTTPException(status_code=404, detail="AP model not found in catalogue")

    return ApInstantiateResponse(
        access_point=spec.to_access_point(request.ap_id, request.x, request.y)
    )
