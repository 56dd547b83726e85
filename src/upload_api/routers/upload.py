import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from upload_api.config.settings import Settings
from upload_api.content_types import detect_content_type, is_allowed
from upload_api.errors import BadRequest, InternalError, MethodNotAllowed
from upload_api.storage import store_file

logger = logging.getLogger(__name__)

UPLOAD_FIELD_NAME = "uploadFile"

router = APIRouter()


def _parse_error(reason: str) -> InternalError:
    return InternalError(f"Could not parse multipart form: {reason}")


async def read_capped_body(request: Request, limit: int) -> bytes:
    """
    Read the whole request body, failing once it grows past ``limit`` bytes.

    Raises:
        InternalError: If the declared or actual body size exceeds ``limit``
    """
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise _parse_error(f"request body too large ({declared} bytes, limit {limit})")

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise _parse_error(f"request body too large (limit {limit} bytes)")
    return bytes(body)


async def parse_multipart_form(request: Request, limit: int) -> FormData:
    """
    Parse a ``multipart/form-data`` body of at most ``limit`` bytes.

    The body is buffered under the cap first and then handed to Starlette's
    form parser through a replaying ``receive`` channel.

    Raises:
        InternalError: If the body is not multipart, too large or malformed
    """
    content_type = request.headers.get("content-type", "")
    if not content_type.lower().startswith("multipart/form-data"):
        raise _parse_error("request Content-Type isn't multipart/form-data")

    body = await read_capped_body(request, limit)

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    buffered = Request(request.scope, receive)
    try:
        return await buffered.form()
    except StarletteHTTPException as e:
        raise _parse_error(str(e.detail)) from e
    except MultiPartException as e:
        raise _parse_error(e.message) from e
    except (KeyError, ValueError) as e:
        raise _parse_error(str(e) or e.__class__.__name__) from e


async def upload_file(request: Request) -> PlainTextResponse:
    """
    Store a file sent as the ``uploadFile`` field of a multipart form.

    The file's type is sniffed from its content; only JPEG, PNG, GIF and PDF
    files are accepted. The file is saved under a random hex name with an
    extension matching the detected type.

    Returns:
        PlainTextResponse: 201 with ``FileType: <mime>, File: <path>``

    Raises:
        MethodNotAllowed: For any method other than POST
        BadRequest: Missing, oversized, unreadable or unsupported file
        InternalError: Unparseable form, entropy, lookup or filesystem failure
    """
    if request.method != "POST":
        raise MethodNotAllowed(request.method)

    settings: Settings = request.app.state.settings

    form = await parse_multipart_form(request, settings.max_request_body_size)
    try:
        # The first part wins when the field is repeated.
        values = form.getlist(UPLOAD_FIELD_NAME)
        upload = values[0] if values else None
        if not isinstance(upload, UploadFile):
            raise BadRequest("Invalid file")

        # Secondary guard: the body cap leaves room for multipart overhead.
        if upload.size is not None and upload.size > settings.max_upload_size:
            raise BadRequest("File is too large")

        try:
            file_bytes = await upload.read()
        except OSError as e:
            raise BadRequest("File is invalid") from e

        file_type = detect_content_type(file_bytes)
        if not is_allowed(file_type):
            raise BadRequest("File type is not supported invalid")

        result = store_file(
            settings.storage_dir,
            file_bytes,
            file_type,
            token_bytes=settings.token_bytes,
        )
    finally:
        await form.close()

    logger.info(f"Upload of {upload.filename!r} stored as {result.path}")
    return PlainTextResponse(
        f"{result.describe()}\n",
        status_code=status.HTTP_201_CREATED,
    )


# A plain route with no method list matches every verb, so non-POST requests
# reach the handler and get a 405 naming the method.
router.add_route("/upload", upload_file, name="upload_file")
