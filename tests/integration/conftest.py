from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from credential_verifier.classification.classifier import CredentialClassifier
from credential_verifier.extraction.text_extractor import TextExtractor
from credential_verifier.ocr.base import BaseOcrEngine
from credential_verifier.pdf.pdfplumber_adapter import PdfPlumberAdapter
from credential_verifier.pdf.rasterizer import PdfRasterizer
from credential_verifier.storage.ipfs_fetcher import IpfsFetcher
from credential_verifier.verification.verifier import CredentialVerifier
from credential_verifier.vision.analyzer import VisionAnalyzer

GATEWAY = "https://gateway.test"


class StubOcrEngine(BaseOcrEngine):
    """Returns canned text so scanned-document paths run without a Tesseract binary."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.calls: list[Path] = []

    def recognize(self, image_path: Path) -> str:
        self.calls.append(image_path)
        assert image_path.exists()
        return self.text


def gateway_client(documents: dict[str, bytes]) -> httpx.Client:
    """httpx client serving ``documents`` by content id under /ipfs/."""

    def handler(request: httpx.Request) -> httpx.Response:
        content_id = request.url.path.removeprefix("/ipfs/")
        if content_id not in documents:
            return httpx.Response(404, text="not found")
        return httpx.Response(
            200,
            content=documents[content_id],
            headers={"content-type": "application/octet-stream"},
        )

    return httpx.Client(transport=httpx.MockTransport(handler))


VerifierFactory = Callable[..., tuple[CredentialVerifier, StubOcrEngine]]


@pytest.fixture()
def build_pipeline(temp_dir: Path) -> VerifierFactory:
    def _build(
        documents: dict[str, bytes],
        ocr_text: str = "",
        vision_analyzer: VisionAnalyzer | None = None,
    ) -> tuple[CredentialVerifier, StubOcrEngine]:
        ocr = StubOcrEngine(ocr_text)
        verifier = CredentialVerifier(
            fetcher=IpfsFetcher(
                gateway_url=GATEWAY, timeout_seconds=5, client=gateway_client(documents)
            ),
            text_extractor=TextExtractor(
                text_layer_extractor=PdfPlumberAdapter(),
                ocr_engine=ocr,
                rasterizer=PdfRasterizer(),
                temp_dir=temp_dir,
            ),
            classifier=CredentialClassifier(),
            vision_analyzer=vision_analyzer,
            temp_dir=temp_dir,
        )
        return verifier, ocr

    return _build
