from datetime import datetime, timedelta, timezone

import httpx
import pytest
from botocore.exceptions import ClientError

from dev2050.common.config import settings
from dev2050.main import app
from dev2050.modules.images import image_service
from dev2050.modules.images.exceptions import (
    ImageConflictError, ImageNotFoundError, ImageTooLargeError,
    ImageValidationError, RenameError,
)
from dev2050.modules.images.schemas import RenameStatus
from dev2050.modules.images.storage import ObjectStorage, get_object_storage

PASSWORD = "letmein"
MB = 1024 * 1024
PLACEHOLDER_ENDPOINT = "https://<account-id>.r2.cloudflarestorage.com"


def storage_calls(storage, name):
    return [call for call in storage.calls if call[0] == name]


# Service

def test_normalize_key_keeps_keys_under_prefix():
    assert image_service.normalize_key("cat.png") == "uploads/cat.png"
    assert image_service.normalize_key("uploads/cat.png") == "uploads/cat.png"
    assert image_service.normalize_key("/cat.png") == "uploads/cat.png"
    for bad in ["", "   ", "folder/", "../secrets.txt"]:
        with pytest.raises(ImageValidationError):
            image_service.normalize_key(bad)


def test_upload_key_is_random_and_keeps_extension():
    first = image_service.build_upload_key("Holiday Photo.JPG")
    second = image_service.build_upload_key("Holiday Photo.JPG")
    assert first.startswith("uploads/") and first.endswith(".jpg")
    assert first != second


async def test_upload_stores_jpeg_under_prefix(storage):
    data = b"\xff" * (2 * MB)

    image = await image_service.upload_image(storage, "photo.jpg", "image/jpeg", data)

    assert image.key.startswith("uploads/")
    assert image.url == f"https://cdn.example.com/{image.key}"
    assert storage.objects[image.key]["data"] == data
    assert storage.objects[image.key]["content_type"] == "image/jpeg"


@pytest.mark.parametrize("content_type, size, error", [
    ("application/pdf", 10, ImageValidationError),
    (None, 10, ImageValidationError),
    ("image/png", 10 * MB + 1, ImageTooLargeError),
])
async def test_upload_validation_happens_before_storage(storage, content_type, size, error):
    with pytest.raises(error):
        await image_service.upload_image(storage, "file", content_type, b"x" * size)
    assert storage.calls == []


async def test_list_images_newest_first_and_skips_folder_placeholder(storage):
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)
    storage.add("uploads/", b"")
    storage.add("uploads/old.png", last_modified=now - timedelta(days=2))
    storage.add("uploads/new.png", last_modified=now)
    storage.add("other/elsewhere.png", last_modified=now)

    images = await image_service.list_images(storage)

    assert [image.key for image in images] == ["uploads/new.png", "uploads/old.png"]
    assert images[0].url == "https://cdn.example.com/uploads/new.png"
    assert images[0].size == 3


async def test_list_images_storage_error_yields_empty_gallery(storage):
    storage.fail_on["list_objects"] = RuntimeError("bucket unreachable")
    assert await image_service.list_images(storage) == []


async def test_list_images_with_misconfigured_endpoint_yields_empty_gallery():
    store = ObjectStorage(
        bucket="gallery",
        public_base_url="https://cdn.example.com",
        endpoint_url=PLACEHOLDER_ENDPOINT,
    )
    assert await image_service.list_images(store) == []


async def test_rename_copies_then_deletes(storage):
    storage.add("uploads/a.png")

    result = await image_service.rename_image(storage, "uploads/a.png", "b.png")

    assert result.status == RenameStatus.RENAMED
    assert result.new_key == "uploads/b.png"
    assert set(storage.objects) == {"uploads/b.png"}
    names = [call[0] for call in storage.calls]
    assert names.index("copy_object") < names.index("delete_object")


async def test_rename_reports_partial_when_delete_fails(storage):
    storage.add("uploads/a.png")
    storage.fail_on["delete_object"] = RuntimeError("delete denied")

    result = await image_service.rename_image(storage, "uploads/a.png", "uploads/b.png")

    assert result.status == RenameStatus.PARTIAL
    assert result.failed_phase == "delete"
    assert set(storage.objects) == {"uploads/a.png", "uploads/b.png"}
    assert result.image.url == "https://cdn.example.com/uploads/b.png"


async def test_rename_copy_failure_leaves_original(storage):
    storage.add("uploads/a.png")
    storage.fail_on["copy_object"] = RuntimeError("copy denied")

    with pytest.raises(RenameError) as excinfo:
        await image_service.rename_image(storage, "uploads/a.png", "uploads/b.png")

    assert excinfo.value.phase == "copy"
    assert set(storage.objects) == {"uploads/a.png"}
    assert storage_calls(storage, "delete_object") == []


async def test_rename_guards(storage):
    storage.add("uploads/a.png")
    storage.add("uploads/b.png")

    with pytest.raises(ImageNotFoundError):
        await image_service.rename_image(storage, "uploads/missing.png", "uploads/c.png")
    with pytest.raises(ImageConflictError):
        await image_service.rename_image(storage, "uploads/a.png", "uploads/b.png")
    with pytest.raises(ImageValidationError):
        await image_service.rename_image(storage, "uploads/a.png", "uploads/a.png")


async def test_delete_missing_key_raises_not_found(storage):
    with pytest.raises(ImageNotFoundError):
        await image_service.delete_image(storage, "uploads/ghost.png")
    assert storage_calls(storage, "delete_object") == []


def test_object_storage_exists_maps_missing_key_to_false():
    class FakeS3:
        def head_object(self, Bucket, Key):
            if Key == "present":
                return {}
            raise ClientError({"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject")

    store = ObjectStorage(bucket="gallery", public_base_url="https://cdn.example.com/", client=FakeS3())
    assert store.exists("present") is True
    assert store.exists("absent") is False
    assert store.public_url("uploads/x.png") == "https://cdn.example.com/uploads/x.png"


# Routes

async def test_upload_route(client, storage):
    files = {"file": ("photo.jpg", b"\xff" * (2 * MB), "image/jpeg")}

    response = await client.post("/api/upload", files=files)

    assert response.status_code == 200
    body = response.json()
    assert body["key"].startswith("uploads/")
    assert body["url"] == f"https://cdn.example.com/{body['key']}"
    assert body["key"] in storage.objects

    gallery = await client.get("/api/images")
    assert gallery.status_code == 200
    images = gallery.json()["images"]
    assert [image["key"] for image in images] == [body["key"]]
    assert images[0]["url"] == f"https://cdn.example.com/{body['key']}"


async def test_upload_route_rejects_non_images_and_oversized_files(client, storage):
    pdf = await client.post("/api/upload", files={"file": ("doc.pdf", b"%PDF", "application/pdf")})
    assert pdf.status_code == 400

    big = await client.post("/api/upload", files={"file": ("big.png", b"x" * (10 * MB + 1), "image/png")})
    assert big.status_code == 413

    assert storage.calls == []


async def test_list_route(client, storage):
    storage.add("uploads/a.png")
    response = await client.get("/api/images")
    assert response.status_code == 200
    assert [image["key"] for image in response.json()["images"]] == ["uploads/a.png"]


async def test_list_route_with_misconfigured_storage_returns_empty_gallery(client, monkeypatch):
    app.dependency_overrides.pop(get_object_storage)
    monkeypatch.setattr(settings, "R2_ENDPOINT", PLACEHOLDER_ENDPOINT)
    get_object_storage.cache_clear()
    try:
        response = await client.get("/api/images")
    finally:
        get_object_storage.cache_clear()

    assert response.status_code == 200
    assert response.json() == {"images": []}


async def test_mutations_require_password(client, storage):
    storage.add("uploads/a.png")

    rename = await client.put("/api/images", json={"old_key": "uploads/a.png", "new_key": "b.png", "password": "wrong"})
    delete = await client.request("DELETE", "/api/images", json={"key": "uploads/a.png", "password": "wrong"})

    assert rename.status_code == 401
    assert delete.status_code == 401
    assert set(storage.objects) == {"uploads/a.png"}


async def test_rename_route_partial(client, storage):
    storage.add("uploads/a.png")
    storage.fail_on["delete_object"] = RuntimeError("delete denied")

    response = await client.put(
        "/api/images", json={"old_key": "uploads/a.png", "new_key": "b.png", "password": PASSWORD}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "partial"
    assert body["failed_phase"] == "delete"
    assert body["error"] == "delete denied"
    assert body["new_key"] == "uploads/b.png"


async def test_rename_route_conflict_and_missing(client, storage):
    storage.add("uploads/a.png")
    storage.add("uploads/b.png")

    conflict = await client.put("/api/images", json={"old_key": "uploads/a.png", "new_key": "b.png", "password": PASSWORD})
    missing = await client.put("/api/images", json={"old_key": "uploads/zz.png", "new_key": "c.png", "password": PASSWORD})

    assert conflict.status_code == 409
    assert missing.status_code == 404


async def test_delete_route(client, storage):
    storage.add("uploads/a.png")

    deleted = await client.request("DELETE", "/api/images", json={"key": "uploads/a.png", "password": PASSWORD})
    missing = await client.request("DELETE", "/api/images", json={"key": "uploads/a.png", "password": PASSWORD})

    assert deleted.status_code == 200
    assert "uploads/a.png" not in storage.objects
    assert missing.status_code == 404


async def test_download_requires_url(client):
    response = await client.get("/api/download")
    assert response.status_code == 400
    assert response.text == "Missing image URL"


async def test_download_rejects_foreign_hosts(client, upstream_handler):
    response = await client.get("/api/download", params={"url": "http://169.254.169.254/latest/meta-data"})
    assert response.status_code == 400
    assert upstream_handler.requests == []


async def test_download_streams_as_attachment(client, upstream_handler):
    url = "https://cdn.example.com/uploads/cat.jpg"

    response = await client.get("/api/download", params={"url": url})

    assert response.status_code == 200
    assert response.content == b"\xff\xd8image-bytes"
    assert response.headers["content-type"] == "image/jpeg"
    assert response.headers["content-disposition"] == 'attachment; filename="cat.jpg"'
    assert response.headers["access-control-allow-origin"] == "*"
    assert str(upstream_handler.requests[0].url) == url


async def test_download_passes_through_upstream_status(client, upstream_handler):
    upstream_handler.handler = lambda request: httpx.Response(404, text="gone")

    response = await client.get("/api/download", params={"url": "https://cdn.example.com/uploads/gone.jpg"})

    assert response.status_code == 404
    assert response.text == "Failed to fetch image"


async def test_download_network_failure_is_500(client, upstream_handler):
    def explode(request):
        raise httpx.ConnectError("unreachable", request=request)

    upstream_handler.handler = explode

    response = await client.get("/api/download", params={"url": "https://cdn.example.com/uploads/cat.jpg"})

    assert response.status_code == 500
    assert response.text == "Download failed"


async def test_download_preflight(client):
    response = await client.options("/api/download")
    assert response.status_code == 200
    assert response.headers["access-control-allow-methods"] == "GET, OPTIONS"
