"""SharePoint document libraries through Microsoft Graph."""

import time
from typing import Any, ClassVar

import httpx

from agenda_insights.documents.base import BaseDocumentSource
from agenda_insights.documents.exceptions import DocumentSourceError
from agenda_insights.documents.models import DocumentRef
from agenda_insights.logging.logger import Log


class GraphDocumentSource(BaseDocumentSource):
    """Document source backed by Microsoft Graph with app-only credentials."""

    GRAPH_URL: ClassVar[str] = "https://graph.microsoft.com/v1.0"
    TOKEN_URL: ClassVar[str] = "https://login.microsoftonline.com/{tenant_id}/oauth2/v2.0/token"
    SCOPE: ClassVar[str] = "https://graph.microsoft.com/.default"
    TOKEN_REFRESH_MARGIN_SECONDS: ClassVar[int] = 60

    def __init__(
        self,
        *,
        tenant_id: str,
        client_id: str,
        client_secret: str,
        tenant_domain: str,
        timeout_seconds: int = 30,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._tenant_id = tenant_id
        self._client_id = client_id
        self._client_secret = client_secret
        self._tenant_domain = tenant_domain
        self._http = http_client or httpx.AsyncClient(timeout=timeout_seconds)
        self._token: str | None = None
        self._token_expires_at = 0.0

    async def resolve_collection_id(self, site_path: str) -> str:
        path = "/" + site_path.strip("/")
        response = await self._get(f"{self.GRAPH_URL}/sites/{self._tenant_domain}:{path}")
        if response.status_code == httpx.codes.NOT_FOUND:
            raise DocumentSourceError(f"Site '{path}' not found")
        self._raise_for_status(response, "site lookup")
        site_id = self._json(response, "site lookup").get("id")
        if not site_id:
            raise DocumentSourceError(f"Site '{path}' has no id")
        return str(site_id)

    async def list_documents(
        self,
        collection_id: str,
        container_id: str,
        item_id: str,
    ) -> list[DocumentRef]:
        url = f"{self.GRAPH_URL}/sites/{collection_id}/lists/{container_id}/items/{item_id}"
        response = await self._get(url, params={"$expand": "driveItem"})
        if response.status_code == httpx.codes.NOT_FOUND:
            return []
        self._raise_for_status(response, "list item lookup")
        drive_item = self._json(response, "list item lookup").get("driveItem")
        if not isinstance(drive_item, dict) or not drive_item:
            return []
        return [self._to_document_ref(drive_item)]

    async def open_stream(self, container_id: str, item_id: str) -> bytes | None:
        url = f"{self.GRAPH_URL}/drives/{container_id}/items/{item_id}/content"
        response = await self._get(url, follow_redirects=True)
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        self._raise_for_status(response, "file download")
        return response.content

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get(self, url: str, **kwargs: Any) -> httpx.Response:
        token = await self._access_token()
        try:
            return await self._http.get(
                url, headers={"Authorization": f"Bearer {token}"}, **kwargs
            )
        except httpx.HTTPError as exc:
            raise DocumentSourceError(
                f"Graph request failed: {exc.__class__.__name__}"
            ) from exc

    async def _access_token(self) -> str:
        if self._token is not None and time.monotonic() < self._token_expires_at:
            return self._token
        try:
            response = await self._http.post(
                self.TOKEN_URL.format(tenant_id=self._tenant_id),
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                    "scope": self.SCOPE,
                },
            )
        except httpx.HTTPError as exc:
            raise DocumentSourceError(
                f"Token request failed: {exc.__class__.__name__}"
            ) from exc
        self._raise_for_status(response, "token request")
        payload = self._json(response, "token request")
        try:
            token = str(payload["access_token"])
            expires_in = int(payload.get("expires_in", 3600))
        except (KeyError, TypeError, ValueError) as exc:
            raise DocumentSourceError(
                f"Graph token request returned no usable token: {exc.__class__.__name__}"
            ) from exc
        self._token = token
        self._token_expires_at = (
            time.monotonic() + expires_in - self.TOKEN_REFRESH_MARGIN_SECONDS
        )
        Log.debug("Acquired Graph access token")
        return token

    @staticmethod
    def _raise_for_status(response: httpx.Response, operation: str) -> None:
        if response.is_success:
            return
        raise DocumentSourceError(f"Graph {operation} failed: HTTP {response.status_code}")

    @staticmethod
    def _json(response: httpx.Response, operation: str) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise DocumentSourceError(f"Graph {operation} returned invalid JSON") from exc
        if not isinstance(payload, dict):
            raise DocumentSourceError(f"Graph {operation} returned unexpected JSON")
        return payload

    @staticmethod
    def _to_document_ref(drive_item: dict[str, Any]) -> DocumentRef:
        parent = drive_item.get("parentReference") or {}
        return DocumentRef(
            name=str(drive_item.get("name", "")),
            parent_container_id=str(parent.get("driveId", "")),
            item_id=str(drive_item.get("id", "")),
        )
