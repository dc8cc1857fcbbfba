"""
Async HTTP client for the Developer 2050 API.

Used by the client-side controllers. Every method raises
httpx.HTTPStatusError on a non-2xx response so callers can catch failures at
their own boundary.
"""
from typing import Any, Dict, List, Optional

import httpx


class Dev2050Client:
    def __init__(
        self,
        base_url: str,
        password: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.password = password
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "Dev2050Client":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _json(self, method: str, url: str, **kwargs) -> Any:
        response = await self._client.request(method, url, **kwargs)
        response.raise_for_status()
        return response.json()

    # Search

    async def search(self, query: str) -> List[Dict[str, Any]]:
        return await self._json("GET", "/search", params={"q": query})

    async def ai_answer(self, query: str) -> Optional[str]:
        data = await self._json("POST", "/ai/answer", json={"query": query})
        return data.get("answer")

    # Learning paths

    async def personalized_plan(self, profile: Any) -> Dict[str, Any]:
        payload = profile.model_dump(mode="json") if hasattr(profile, "model_dump") else profile
        return await self._json("POST", "/learning-paths/personalized", json=payload)

    # Auth

    async def verify_password(self, password: str) -> bool:
        response = await self._client.post("/api/auth/verify", json={"password": password})
        if response.status_code == 401:
            return False
        response.raise_for_status()
        self.password = password
        return True

    # Images

    async def list_images(self) -> List[Dict[str, Any]]:
        data = await self._json("GET", "/api/images")
        return data.get("images") or []

    async def upload_image(self, filename: str, content: bytes, content_type: str) -> Dict[str, Any]:
        files = {"file": (filename, content, content_type)}
        return await self._json("POST", "/api/upload", files=files)

    async def rename_image(self, old_key: str, new_key: str) -> Dict[str, Any]:
        payload = {"old_key": old_key, "new_key": new_key, "password": self.password or ""}
        return await self._json("PUT", "/api/images", json=payload)

    async def delete_image(self, key: str) -> Dict[str, Any]:
        payload = {"key": key, "password": self.password or ""}
        return await self._json("DELETE", "/api/images", json=payload)
