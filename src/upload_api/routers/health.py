import os

from fastapi import APIRouter, Request

from upload_api.config.settings import Settings

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint for monitoring API status and component readiness.

    Returns status of the API and of the storage directory.
    """
    settings: Settings = request.app.state.settings

    health_status = {
        "status": "ok",
        "components": {
            "api": "ready",
            "storage": "ready",
        },
        "ready": False,
    }

    storage_dir = settings.storage_dir
    if not os.path.isdir(storage_dir):
        health_status["components"]["storage"] = f"error: {storage_dir} does not exist"
        health_status["status"] = "degraded"
    elif not os.access(storage_dir, os.W_OK):
        health_status["components"]["storage"] = f"error: {storage_dir} is not writable"
        health_status["status"] = "degraded"

    health_status["ready"] = all(
        value == "ready" for value in health_status["components"].values()
    )

    return health_status
