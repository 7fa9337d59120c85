import re

import httpx

from credential_verifier.logging.logger import Log
from credential_verifier.storage.exceptions import FetchError
from credential_verifier.storage.file_types import detect_kind, mime_type_for, sniff_extension
from credential_verifier.storage.models import DocumentHandle
from credential_verifier.storage.temp_files import TempFileArena


class IpfsFetcher:
    """Downloads a document from an IPFS gateway into a temp file arena."""

    def __init__(
        self,
        *,
        gateway_url: str,
        timeout_seconds: int,
        client: httpx.Client | None = None,
    ) -> None:
        self._gateway_url = gateway_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout_seconds, follow_redirects=True)

    def fetch(self, content_id: str, arena: TempFileArena) -> DocumentHandle:
        """Download *content_id* and store it under a unique name in *arena*.

        Raises:
            FetchError: on empty content id, network failure, timeout,
                non-2xx status or an empty body.
        """
        content_id = content_id.strip()
        if not content_id:
            raise FetchError("Content id must not be empty")

        url = f"{self._gateway_url}/ipfs/{content_id}"
        Log.info(f"Downloading reference document from {url}")
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise FetchError(f"Timed out fetching {content_id}: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"Content store returned {exc.response.status_code} for {content_id}"
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Failed to fetch {content_id}: {exc}") from exc

        data = response.content
        if not data:
            raise FetchError(f"Content store returned an empty body for {content_id}")

        extension = sniff_extension(data, response.headers.get("content-type"))
        prefix = "reference_" + re.sub(r"[^A-Za-z0-9]", "", content_id)[:10]
        try:
            path = arena.write(prefix, extension, data)
        except OSError as exc:
            raise FetchError(f"Failed to store {content_id} locally: {exc}") from exc
        kind = detect_kind(path, data[:4])
        Log.info(f"Downloaded {len(data)} bytes", content_id=content_id, kind=kind.value)
        return DocumentHandle(path=path, kind=kind, mime_type=mime_type_for(path, kind))
