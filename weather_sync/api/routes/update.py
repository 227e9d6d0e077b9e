from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

import structlog
from ...errors import PipelineError
from ...schemas.update import UpdateResponse

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.post(
    "/update",
    response_model=UpdateResponse,
    summary="Fetch current weather and insert it into the store",
    responses={
        200: {
            "description": "Record inserted",
            "content": {"application/json": {"example": {"message": "weather data for Montreal inserted"}}},
        },
        502: {
            "description": "Upstream provider or destination store failed",
            "model": UpdateResponse,
            "content": {"application/json": {"example": {"message": "supabase returned status 500"}}},
        },
    },
)
def update(request: Request):
    # Sync handler: FastAPI runs it in the threadpool, off the event loop
    pipeline = request.app.state.pipeline
    try:
        record = pipeline.run()
    except PipelineError as e:
        logger.error("manual_update_failed", error=str(e))
        return JSONResponse(status_code=502, content=UpdateResponse(message=str(e)).model_dump())
    return UpdateResponse(message=f"weather data for {record.location} inserted")
