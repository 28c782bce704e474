import time
from fastapi import APIRouter, Depends, HTTPException
from app.api.deps import get_event_store
from app.core.errors import TransientFetchError
from app.services.event_store import EventStore

router = APIRouter()


@router.get("/health")
async def health_check(store: EventStore = Depends(get_event_store)):
    health_status = {
        "status": "healthy",
        "timestamp": time.time(),
        "components": {"api": "up", "database": "down"},
    }

    try:
        start_time = time.perf_counter()
        await store.ping()
        end_time = time.perf_counter()

        health_status["components"]["database"] = "up"
        health_status["database_latency_ms"] = round((end_time - start_time) * 1000, 2)

    except TransientFetchError as e:
        health_status["status"] = "unhealthy"
        health_status["error"] = str(e)

        # return a 503 Service Unavailable so load balancers know we are down
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
