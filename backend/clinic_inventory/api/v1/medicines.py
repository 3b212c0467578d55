"""Medicine API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, status

from clinic_inventory.api.v1.dependencies import MedicineServiceDep
from clinic_inventory.api.v1.errors import to_http_exception
from clinic_inventory.api.v1.schemas import MedicineListResponse, MedicineResponse, StatusResponse
from clinic_inventory.services.exceptions import ServiceError

router = APIRouter(tags=["medicines"])


@router.post(
    "/medicines",
    response_model=MedicineResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createMedicine",
)
async def create_medicine(
    payload: Annotated[dict[str, Any], Body()],
    service: MedicineServiceDep,
) -> MedicineResponse:
    """Create a medicine. medicine_id is generated ("MED00001") when omitted."""
    try:
        medicine = await service.create_medicine(payload)
    except ServiceError as e:
        raise to_http_exception(e, entity="Medicine") from e
    return MedicineResponse.from_model(medicine)


@router.get("/medicines", response_model=MedicineListResponse, operation_id="listMedicines")
async def list_medicines(
    service: MedicineServiceDep,
    skip: int = 0,
    limit: int = 50,
) -> MedicineListResponse:
    """List medicines with pagination."""
    medicines, total = await service.list_medicines(skip=skip, limit=limit)
    return MedicineListResponse(
        medicines=[MedicineResponse.from_model(m) for m in medicines],
        total=total,
    )


@router.get("/medicines/search", response_model=MedicineListResponse, operation_id="searchMedicines")
async def search_medicines(
    service: MedicineServiceDep,
    q: str = "",
    limit: int = 10,
) -> MedicineListResponse:
    """Autocomplete search on medicine_name (case-insensitive substring)."""
    try:
        medicines = await service.search_medicines(q, limit=limit)
    except ServiceError as e:
        raise to_http_exception(e, entity="Medicine") from e
    return MedicineListResponse(
        medicines=[MedicineResponse.from_model(m) for m in medicines],
        total=len(medicines),
    )


@router.get("/medicines/{medicine_id}", response_model=MedicineResponse, operation_id="getMedicine")
async def get_medicine(
    medicine_id: str,
    service: MedicineServiceDep,
) -> MedicineResponse:
    """Get a single medicine by its business ID."""
    try:
        medicine = await service.get_medicine(medicine_id)
    except ServiceError as e:
        raise to_http_exception(e, entity="Medicine") from e
    return MedicineResponse.from_model(medicine)


@router.put("/medicines/{medicine_id}", response_model=MedicineResponse, operation_id="updateMedicine")
async def update_medicine(
    medicine_id: str,
    payload: Annotated[dict[str, Any], Body()],
    service: MedicineServiceDep,
) -> MedicineResponse:
    """Update a medicine. Omitted fields keep their values; medicine_id cannot be changed."""
    try:
        medicine = await service.update_medicine(medicine_id, payload)
    except ServiceError as e:
        raise to_http_exception(e, entity="Medicine") from e
    return MedicineResponse.from_model(medicine)


@router.delete("/medicines/{medicine_id}", response_model=StatusResponse, operation_id="deleteMedicine")
async def delete_medicine(
    medicine_id: str,
    service: MedicineServiceDep,
) -> StatusResponse:
    """Delete a medicine."""
    try:
        await service.delete_medicine(medicine_id)
    except ServiceError as e:
        raise to_http_exception(e, entity="Medicine") from e
    return StatusResponse(status="ok", message=f"Deleted medicine {medicine_id}")
