# dev2050/modules/images/image_controller.py

import logging
from typing import Callable, Optional

import httpx
from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, UploadFile, status
from fastapi.responses import Response, StreamingResponse
from starlette.background import BackgroundTask

from dev2050.auth.dependencies import ensure_admin_password
from dev2050.common.config import settings
from dev2050.common.rate_limit import limiter
from dev2050.common.utils.global_messages import GlobalMessages
from dev2050.modules.images import image_service, schemas
from dev2050.modules.images.exceptions import (
    ImageConflictError, ImageNotFoundError, ImageTooLargeError,
    ImageValidationError, RenameError,
)
from dev2050.modules.images.storage import ObjectStorage, get_object_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["images"])

DOWNLOAD_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

def get_http_client_factory() -> Callable[[], httpx.AsyncClient]:
    return lambda: httpx.AsyncClient(timeout=60.0, follow_redirects=True)

# GET /api/images – List the gallery, newest first
@router.get("/images", response_model=schemas.ImageListResponse)
async def list_images(storage: ObjectStorage = Depends(get_object_storage)):
    images = await image_service.list_images(storage)
    return schemas.ImageListResponse(images=images)

# POST /api/upload – Store a new image under a random key
@router.post("/upload", response_model=schemas.UploadResponse)
@limiter.limit("10/minute")
async def upload_image(
    request: Request,
    file: UploadFile = File(...),
    storage: ObjectStorage = Depends(get_object_storage)
):
    # Read one byte past the ceiling so oversized files are detected without buffering them whole
    data = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    try:
        image = await image_service.upload_image(storage, file.filename or "", file.content_type, data)
    except ImageTooLargeError as e:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=str(e))
    except ImageValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception:
        logger.exception("Upload failed for %s", file.filename)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=GlobalMessages.UPLOAD_FAILED)
    return schemas.UploadResponse(url=image.url, key=image.key)

# PUT /api/images – Rename (copy to new key, then delete old key)
@router.put("/images", response_model=schemas.RenameResponse)
async def rename_image(
    body: schemas.RenameRequest,
    storage: ObjectStorage = Depends(get_object_storage)
):
    ensure_admin_password(body.password)
    try:
        result = await image_service.rename_image(storage, body.old_key, body.new_key)
    except ImageValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ImageNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=GlobalMessages.IMAGE_NOT_FOUND)
    except ImageConflictError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=GlobalMessages.IMAGE_KEY_CONFLICT)
    except RenameError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except Exception:
        logger.exception("Rename %s -> %s failed", body.old_key, body.new_key)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=GlobalMessages.STORAGE_UNAVAILABLE)

    message = (
        GlobalMessages.IMAGE_RENAMED
        if result.status == schemas.RenameStatus.RENAMED
        else GlobalMessages.IMAGE_RENAME_PARTIAL
    )
    return schemas.RenameResponse(
        status=result.status,
        old_key=result.old_key,
        new_key=result.new_key,
        image=result.image,
        failed_phase=result.failed_phase,
        error=result.error_message,
        message=message,
    )

# DELETE /api/images – Remove an image by key
@router.delete("/images", response_model=schemas.MessageResponse)
async def delete_image(
    body: schemas.DeleteRequest,
    storage: ObjectStorage = Depends(get_object_storage)
):
    ensure_admin_password(body.password)
    try:
        await image_service.delete_image(storage, body.key)
    except ImageNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=GlobalMessages.IMAGE_NOT_FOUND)
    except Exception:
        logger.exception("Delete of %s failed", body.key)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=GlobalMessages.STORAGE_UNAVAILABLE)
    return schemas.MessageResponse(message=GlobalMessages.IMAGE_DELETED)

def _is_allowed_download(url: str) -> bool:
    if not url.startswith(("http://", "https://")):
        return False
    if not settings.R2_PUBLIC_URL:
        return True
    return url.startswith(settings.R2_PUBLIC_URL.rstrip("/") + "/")

# GET /api/download – Proxy an image so browsers save it instead of opening it
@router.get("/download")
async def download_image(
    url: Optional[str] = Query(None),
    client_factory: Callable[[], httpx.AsyncClient] = Depends(get_http_client_factory)
):
    if not url:
        return Response(GlobalMessages.MISSING_IMAGE_URL, status_code=status.HTTP_400_BAD_REQUEST)
    if not _is_allowed_download(url):
        return Response(GlobalMessages.IMAGE_URL_NOT_ALLOWED, status_code=status.HTTP_400_BAD_REQUEST)

    client = client_factory()
    try:
        upstream = await client.send(client.build_request("GET", url), stream=True)
    except Exception as e:
        await client.aclose()
        logger.error("Download error for %s: %s", url, e)
        return Response(GlobalMessages.DOWNLOAD_FAILED, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if upstream.status_code >= 400:
        await upstream.aclose()
        await client.aclose()
        return Response(GlobalMessages.IMAGE_FETCH_FAILED, status_code=upstream.status_code)

    async def close_upstream():
        await upstream.aclose()
        await client.aclose()

    filename = url.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1].replace('"', "")
    headers = {
        **DOWNLOAD_CORS_HEADERS,
        "Content-Disposition": f'attachment; filename="{filename}"' if filename else "attachment",
    }
    return StreamingResponse(
        upstream.aiter_bytes(),
        media_type=upstream.headers.get("Content-Type", "image/jpeg"),
        headers=headers,
        background=BackgroundTask(close_upstream),
    )

# OPTIONS /api/download – CORS preflight
@router.options("/download")
async def download_preflight():
    return Response(status_code=status.HTTP_200_OK, headers=DOWNLOAD_CORS_HEADERS)
