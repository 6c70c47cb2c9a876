"""
State Endpoints - render the current state, flag and counter events

Every mutating endpoint turns the request into exactly one event and waits
until the runtime has processed it, then answers with the resulting state.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_runtime, get_service_container
from api.schemas.state import StateResponse, SetEnabledRequest, CounterResponse
from models.events import ToggleEnabledEvent, IncrementEvent, DecrementEvent
from services.application_runtime import ApplicationRuntime
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

router = APIRouter(tags=["State"])


@router.get("/state", response_model=StateResponse)
async def get_state(services: ServiceContainer = Depends(get_service_container)) -> StateResponse:
    """Read-only snapshot of the whole application state"""
    return StateResponse.from_snapshot(services.runtime.snapshot())


@router.put("/state/enabled", response_model=StateResponse)
async def set_enabled(
    request: SetEnabledRequest,
    runtime: ApplicationRuntime = Depends(get_runtime)
) -> StateResponse:
    """Switch the feature flag (while on, each new clock second bumps the counter)"""
    snapshot = await runtime.submit_and_wait(ToggleEnabledEvent(request.enabled))
    log.info(f"Flag {'enabled' if snapshot.enabled else 'disabled'}")
    return StateResponse.from_snapshot(snapshot)


@router.post("/counter/increment", response_model=CounterResponse)
async def increment(runtime: ApplicationRuntime = Depends(get_runtime)) -> CounterResponse:
    snapshot = await runtime.submit_and_wait(IncrementEvent())
    return CounterResponse(counter=snapshot.counter)


@router.post("/counter/decrement", response_model=CounterResponse)
async def decrement(runtime: ApplicationRuntime = Depends(get_runtime)) -> CounterResponse:
    snapshot = await runtime.submit_and_wait(DecrementEvent())
    return CounterResponse(counter=snapshot.counter)
