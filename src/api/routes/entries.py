"""
Entry Endpoints - list, append, edit and save filter list entries

Edit indices are checked against the live buffer count before the event is
dispatched. An index that leaves the range while the edit is queued is
answered with the same 404.
"""

from fastapi import APIRouter, Depends, Path, status

from api.dependencies import get_runtime, get_service_container
from api.middleware.error_handler import EntryNotFoundError
from api.schemas.state import (
    EditActionRequest,
    EntryListResponse,
    EntryResponse,
    SaveAcceptedResponse,
)
from models.events import AddEntryEvent, EditEntryEvent, RequestSaveEvent
from services.application_runtime import ApplicationRuntime
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/entries", tags=["Entries"])


@router.get("", response_model=EntryListResponse)
async def list_entries(services: ServiceContainer = Depends(get_service_container)) -> EntryListResponse:
    snapshot = services.runtime.snapshot()
    return EntryListResponse(entries=list(snapshot.entries), count=snapshot.entry_count)


@router.post("", response_model=EntryResponse, status_code=status.HTTP_201_CREATED)
async def add_entry(runtime: ApplicationRuntime = Depends(get_runtime)) -> EntryResponse:
    """Append an empty entry"""
    snapshot = await runtime.submit_and_wait(AddEntryEvent())
    return EntryResponse(index=snapshot.entry_count - 1, text=snapshot.entries[-1])


@router.post("/save", response_model=SaveAcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
async def save_entries(runtime: ApplicationRuntime = Depends(get_runtime)) -> SaveAcceptedResponse:
    """
    Persist the entries. The write happens in the background; poll /state
    for last_error to learn whether it failed.
    """
    snapshot = await runtime.submit_and_wait(RequestSaveEvent())
    log.info("Save requested", entries=snapshot.entry_count)
    return SaveAcceptedResponse(path=snapshot.file_path, entry_count=snapshot.entry_count)


@router.post("/{index}/actions", response_model=EntryResponse)
async def edit_entry(
    request: EditActionRequest,
    index: int = Path(ge=0, description="Entry index"),
    runtime: ApplicationRuntime = Depends(get_runtime)
) -> EntryResponse:
    """Apply one edit action to an entry buffer"""
    # A save completion queued ahead of this edit may split an earlier entry and
    # shift this index, or drop a lone empty entry and take it out of range
    entry_count = len(runtime.state.buffers)
    if index >= entry_count:
        raise EntryNotFoundError(index, entry_count)

    try:
        snapshot = await runtime.submit_and_wait(EditEntryEvent(index, request.to_action()))
    except IndexError:
        raise EntryNotFoundError(index, len(runtime.state.buffers)) from None
    return EntryResponse(index=index, text=snapshot.entries[index])
