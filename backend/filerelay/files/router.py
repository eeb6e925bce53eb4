"""FastAPI router for file upload and download endpoints."""
import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse, StreamingResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from .schemas import UPLOAD_FIELD
from .service import FileStore, StoreEntryNotFound

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])


def _store() -> FileStore:
    return FileStore.get_instance()


@router.post("/upload", response_class=PlainTextResponse)
async def upload_file(request: Request) -> PlainTextResponse:
    """Store the multipart file field ``afile`` under its client filename.

    Returns:
        Plain-text confirmation with the stored name and byte count

    Raises:
        HTTPException 400: If the body is not valid form data
        HTTPException 500: If the field is missing or the write fails
    """
    # Starlette turns malformed multipart bodies into a 400 here.
    form = await request.form()
    try:
        upload = form.get(UPLOAD_FIELD)
        if not isinstance(upload, UploadFile):
            # Arguably a client error; kept as 500 for compatibility.
            raise HTTPException(status_code=500, detail="http: no such file")

        name = upload.filename or ""
        stored = await run_in_threadpool(_store().save, name, upload.file)
    except (OSError, ValueError) as e:
        logger.error(f"File upload failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    finally:
        await form.close()

    return PlainTextResponse(
        f"UPLOADED: File '{stored.name}' with {stored.size_bytes} bytes\n"
    )


@router.get("/download/{filename}")
async def download_file(filename: str) -> StreamingResponse:
    """Stream a stored file back with sniffed type and exact length.

    Raises:
        HTTPException 404: If no entry has that name
        HTTPException 500: If sniffing or the size query fails
    """
    try:
        download = await run_in_threadpool(_store().open_download, filename)
    except StoreEntryNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except OSError as e:
        logger.error(f"File download failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"Sending {filename} ({download.size_bytes} bytes, {download.media_type})")
    try:
        return StreamingResponse(download.iter_bytes(), headers=download.headers())
    except Exception as e:
        download.close()
        logger.error(f"File download failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
