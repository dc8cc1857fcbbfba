import json

import httpx

from dev2050.modules.blog import blog_service

POST_DOC = {
    "_id": "post-1",
    "title": "Shipping a FastAPI app",
    "slug": {"current": "shipping-fastapi"},
    "mainImage": {"asset": {"_ref": "image-abc123-1200x630-png"}},
    "publishedAt": "2025-03-01T10:00:00Z",
    "categories": ["Python", None],
    "excerpt": "How we deployed...",
}


def mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_image_url_for_resolves_asset_reference():
    url = blog_service.image_url_for({"asset": {"_ref": "image-abc123-1200x630-png"}})
    assert url == "https://cdn.sanity.io/images/proj123/production/abc123-1200x630.png"
    assert blog_service.image_url_for({"asset": {"_ref": "file-xyz-pdf"}}) is None
    assert blog_service.image_url_for(None) is None


def test_portable_text_to_plain():
    blocks = [
        {"_type": "block", "children": [{"text": "Hello "}, {"text": "world"}]},
        {"_type": "image"},
        {"_type": "block", "children": [{"text": "Second paragraph"}]},
    ]
    assert blog_service.portable_text_to_plain(blocks) == "Hello world\n\nSecond paragraph"


async def test_get_posts_adapts_documents_and_skips_unpublished_slugs():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"result": [POST_DOC, {"_id": "draft", "title": "Draft"}]})

    async with mock_client(handler) as client:
        posts = await blog_service.get_posts(client=client)

    assert len(posts) == 1
    post = posts[0]
    assert post.slug == "shipping-fastapi"
    assert post.categories == ["Python"]
    assert post.main_image_url.endswith("abc123-1200x630.png")
    assert seen[0].url.host == "proj123.api.sanity.io"


async def test_get_posts_is_cached():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"result": [POST_DOC]})

    async with mock_client(handler) as client:
        await blog_service.get_posts(client=client)
        await blog_service.get_posts(client=client)

    assert len(calls) == 1


async def test_get_post_by_slug_sends_json_encoded_parameter():
    seen = []

    def handler(request):
        seen.append(request)
        doc = dict(POST_DOC, body=[{"_type": "block", "children": [{"text": "Body text"}]}])
        return httpx.Response(200, json={"result": doc})

    async with mock_client(handler) as client:
        post = await blog_service.get_post_by_slug("shipping-fastapi", client=client)

    assert post.body_text == "Body text"
    assert seen[0].url.params["$slug"] == json.dumps("shipping-fastapi")


async def test_missing_post_and_errors():
    async with mock_client(lambda request: httpx.Response(200, json={"result": None})) as client:
        assert await blog_service.get_post_by_slug("nope", client=client) is None

    async with mock_client(lambda request: httpx.Response(500)) as client:
        assert await blog_service.get_posts(client=client) == []
