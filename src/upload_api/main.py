from textwrap import dedent
import logging

from fastapi import FastAPI
from fastapi.routing import APIRoute

from upload_api.config.settings import Settings
from upload_api.errors import (
    UploadError,
    handle_broad_exceptions,
    handle_upload_errors,
)
from upload_api.routers.health import router as health_router
from upload_api.routers.upload import router as upload_router
from upload_api.storage import StorageFiles, ensure_storage_dir

# Set up logging
logger = logging.getLogger(__name__)

FILES_MOUNT_PATH = "/files"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application serving uploads from ``settings.storage_dir``."""
    settings = settings or Settings()

    app = FastAPI(
        title="Upload API",
        summary="Upload images and PDFs, download them by generated name",
        version="v1",
        description=dedent(
            """\
        | Endpoint | Notes |
        | --- | --- |
        | `POST /upload` | multipart form, file field `uploadFile`, JPEG/PNG/GIF/PDF up to 2 MB |
        | `GET /files/{fileName}` | download a stored file |
        """
        ),
        generate_unique_id_function=custom_generate_unique_id,
    )
    app.state.settings = settings

    storage_dir = ensure_storage_dir(settings.storage_dir)
    logger.info(f"Serving files from {storage_dir}")

    app.include_router(upload_router, tags=["upload"])
    app.include_router(health_router, tags=["health"])
    app.mount(FILES_MOUNT_PATH, StorageFiles(directory=storage_dir), name="files")

    app.add_exception_handler(
        exc_class_or_status_code=UploadError,
        handler=handle_upload_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
