"""Sequence counter inspection endpoints (read-only)."""

from fastapi import APIRouter

from clinic_inventory.api.v1.dependencies import CounterStoreDep
from clinic_inventory.api.v1.errors import to_http_exception
from clinic_inventory.api.v1.schemas import SequenceResponse
from clinic_inventory.services.exceptions import ServiceError

router = APIRouter(tags=["sequences"])


@router.get("/sequences", response_model=list[SequenceResponse], operation_id="listSequences")
async def list_sequences(counter_store: CounterStoreDep) -> list[SequenceResponse]:
    """List all sequence counters with their last issued value."""
    try:
        counters = await counter_store.list_counters()
    except ServiceError as e:
        raise to_http_exception(e, entity="Sequence") from e
    return [SequenceResponse.from_model(c) for c in counters]


@router.get("/sequences/{name}", response_model=SequenceResponse, operation_id="getSequence")
async def get_sequence(name: str, counter_store: CounterStoreDep) -> SequenceResponse:
    """Get the last issued value of a sequence (0 if nothing was drawn yet)."""
    try:
        seq = await counter_store.current_value(name)
    except ServiceError as e:
        raise to_http_exception(e, entity="Sequence") from e
    return SequenceResponse(name=name, seq=seq)
