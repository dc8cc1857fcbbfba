"""
Read-only access to blog posts stored in Sanity.

Posts are fetched with GROQ queries over Sanity's HTTP query API and adapted
into plain schemas. Image references are resolved to CDN URLs and portable
text bodies are flattened to plain text for previews.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from dev2050.common.config import settings
from dev2050.common.utils.cache import TTLCache
from dev2050.modules.blog.schemas import BlogPost, BlogPostSummary

logger = logging.getLogger(__name__)

POSTS_QUERY = """*[_type == "post"] | order(publishedAt desc) {
  _id,
  title,
  slug,
  mainImage,
  publishedAt,
  "categories": categories[]->title,
  "excerpt": array::join(string::split((pt::text(body)), "")[0..200], "") + "..."
}"""

POST_BY_SLUG_QUERY = """*[_type == "post" && slug.current == $slug][0] {
  _id,
  title,
  slug,
  mainImage,
  publishedAt,
  "categories": categories[]->title,
  body
}"""

_IMAGE_REF = re.compile(r"^image-(?P<id>[a-zA-Z0-9]+)-(?P<dims>\d+x\d+)-(?P<fmt>[a-z0-9]+)$")

# Keyed by (query, params)
blog_cache = TTLCache(ttl_seconds=settings.BLOG_CACHE_TTL_SECONDS)

def query_url() -> str:
    return (
        f"https://{settings.SANITY_PROJECT_ID}.api.sanity.io/"
        f"v{settings.SANITY_API_VERSION}/data/query/{settings.SANITY_DATASET}"
    )

def image_url_for(image: Optional[Dict[str, Any]]) -> Optional[str]:
    """
    Resolve a Sanity image field (asset reference "image-<id>-<w>x<h>-<fmt>")
    to its CDN URL.
    """
    if not image:
        return None
    ref = (image.get("asset") or {}).get("_ref", "")
    match = _IMAGE_REF.match(ref)
    if not match:
        return None
    return (
        f"https://cdn.sanity.io/images/{settings.SANITY_PROJECT_ID}/{settings.SANITY_DATASET}/"
        f"{match['id']}-{match['dims']}.{match['fmt']}"
    )

def portable_text_to_plain(blocks: Optional[List[Dict[str, Any]]]) -> str:
    paragraphs = []
    for block in blocks or []:
        if block.get("_type") != "block":
            continue
        text = "".join(child.get("text", "") for child in block.get("children") or [])
        if text.strip():
            paragraphs.append(text)
    return "\n\n".join(paragraphs)

async def _run_query(query: str, params: Dict[str, Any], client: Optional[httpx.AsyncClient]) -> Any:
    if not settings.SANITY_PROJECT_ID:
        raise RuntimeError("SANITY_PROJECT_ID is not configured")

    request_params = {"query": query}
    # GROQ parameters are passed as JSON-encoded values prefixed with "$"
    request_params.update({f"${name}": json.dumps(value) for name, value in params.items()})
    headers = {"Authorization": f"Bearer {settings.SANITY_TOKEN}"} if settings.SANITY_TOKEN else {}

    if client is not None:
        response = await client.get(query_url(), params=request_params, headers=headers, timeout=15.0)
    else:
        async with httpx.AsyncClient() as owned_client:
            response = await owned_client.get(query_url(), params=request_params, headers=headers, timeout=15.0)
    response.raise_for_status()
    return response.json().get("result")

def _summary_fields(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": doc["_id"],
        "title": doc.get("title") or "Untitled",
        "slug": (doc.get("slug") or {}).get("current", ""),
        "main_image_url": image_url_for(doc.get("mainImage")),
        "published_at": doc.get("publishedAt"),
        "categories": [c for c in doc.get("categories") or [] if c],
    }

async def get_posts(client: Optional[httpx.AsyncClient] = None) -> List[BlogPostSummary]:
    """
    All posts, most recently published first. Errors produce an empty list.
    """
    cache_key = (POSTS_QUERY, ())
    cached = blog_cache.get(cache_key)
    if cached is not None:
        return list(cached)
    try:
        docs = await _run_query(POSTS_QUERY, {}, client) or []
        posts = [
            BlogPostSummary(**_summary_fields(doc), excerpt=doc.get("excerpt"))
            for doc in docs
            if (doc.get("slug") or {}).get("current")
        ]
    except Exception as e:
        logger.error("Error fetching blog posts: %s", e)
        return []
    blog_cache.set(cache_key, posts)
    return list(posts)

async def get_post_by_slug(slug: str, client: Optional[httpx.AsyncClient] = None) -> Optional[BlogPost]:
    cache_key = (POST_BY_SLUG_QUERY, (("slug", slug),))
    cached = blog_cache.get(cache_key)
    if cached is not None:
        return cached
    try:
        doc = await _run_query(POST_BY_SLUG_QUERY, {"slug": slug}, client)
        if not doc:
            return None
        body = doc.get("body") or []
        post = BlogPost(**_summary_fields(doc), body=body, body_text=portable_text_to_plain(body))
    except Exception as e:
        logger.error("Error fetching blog post %r: %s", slug, e)
        return None
    blog_cache.set(cache_key, post)
    return post
