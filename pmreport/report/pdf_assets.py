"""Binary asset loading for the report: logos and signature images.

Every loader here returns ``None`` instead of raising; a missing or
undecodable asset is logged as a warning and the layout falls back to a text
label (logos) or leaves the space empty (signatures).
"""

from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Callable
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING, Any
from urllib.error import URLError
from urllib.request import Request, urlopen

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader

if TYPE_CHECKING:
    from ..config import ReportConfig
    from .report_data import MaintenanceReportData

LOGGER = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT_S = 10.0
MAX_IMAGE_BYTES = 10 * 1024 * 1024

# Signatures are accepted as PNG first, then JPEG.
IMAGE_FORMATS = ("PNG", "JPEG")


@dataclass
class ReportAssets:
    left_logo: ImageReader | None = None
    right_logo: ImageReader | None = None
    engineer_signature: ImageReader | None = None
    site_signature: ImageReader | None = None


def decode_image(raw: bytes) -> ImageReader | None:
    """Decode *raw* as PNG, falling back to JPEG; ``None`` if neither parses."""
    if not raw:
        return None
    for fmt in IMAGE_FORMATS:
        try:
            img = Image.open(BytesIO(raw), formats=[fmt])
            img.load()
        except (UnidentifiedImageError, OSError, ValueError):
            continue
        return ImageReader(img)
    return None


def decode_data_uri(uri: str) -> bytes | None:
    """Return the decoded payload of a base64 ``data:`` URI, or ``None``."""
    _, sep, payload = uri.partition(",")
    if not sep or not payload:
        return None
    try:
        return base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError):
        return None


class AssetLoader:
    """Fetch and decode report images.

    Logos are read from the configured local paths. Signatures come from
    request data, so they are only taken from a ``data:`` URI or an
    ``http(s)://`` URL and never from the server filesystem. Fetches are
    synchronous and happen before layout starts.
    """

    def __init__(
        self,
        *,
        left_logo_path: Path | None = None,
        right_logo_path: Path | None = None,
        timeout_s: float = DEFAULT_FETCH_TIMEOUT_S,
        allow_insecure_http: bool = True,
        opener: Callable[..., Any] = urlopen,
    ) -> None:
        self.left_logo_path = left_logo_path
        self.right_logo_path = right_logo_path
        self.timeout_s = timeout_s
        self.allow_insecure_http = allow_insecure_http
        self._opener = opener

    @classmethod
    def from_config(cls, config: ReportConfig) -> AssetLoader:
        return cls(
            left_logo_path=config.left_logo_path,
            right_logo_path=config.right_logo_path,
            timeout_s=config.signature_fetch_timeout_s,
            allow_insecure_http=config.allow_insecure_http,
        )

    def _fetch_url(self, url: str) -> bytes | None:
        if url.startswith("http://") and not self.allow_insecure_http:
            LOGGER.warning("Refusing non-HTTPS image URL: %s", url)
            return None
        req = Request(url, headers={"Accept": "image/png, image/jpeg"})
        try:
            with self._opener(req, timeout=self.timeout_s) as resp:  # noqa: S310
                status = getattr(resp, "status", 200)
                if status is not None and status >= 400:
                    LOGGER.warning("Image fetch returned HTTP %s: %s", status, url)
                    return None
                return resp.read(MAX_IMAGE_BYTES + 1)
        except (URLError, OSError, ValueError) as exc:
            LOGGER.warning("Could not fetch image %s: %s", url, exc)
            return None

    def _read_remote(self, text: str) -> bytes | None:
        if text.startswith("data:"):
            raw = decode_data_uri(text)
            if raw is None:
                LOGGER.warning("Could not decode data URI image")
            return raw
        return self._fetch_url(text)

    def read_source(self, source: str | Path | None, *, allow_files: bool = True) -> bytes | None:
        """Return raw bytes for *source*, or ``None`` when it is unavailable.

        With ``allow_files=False`` only ``data:`` URIs and ``http(s)://`` URLs
        are read; anything else is refused.
        """
        if not source:
            return None
        text = str(source).strip()
        if text.startswith(("data:", "http://", "https://")):
            raw = self._read_remote(text)
        elif not allow_files:
            LOGGER.warning("Refusing image source that is not a URL or data URI: %s", text[:80])
            return None
        else:
            path = Path(text)
            try:
                raw = path.read_bytes()
            except OSError as exc:
                LOGGER.warning("Could not read image file %s: %s", path, exc)
                return None
        if raw is not None and len(raw) > MAX_IMAGE_BYTES:
            LOGGER.warning("Image %s exceeds %d bytes; skipping", text[:80], MAX_IMAGE_BYTES)
            return None
        return raw

    def load_image(
        self, source: str | Path | None, *, allow_files: bool = True
    ) -> ImageReader | None:
        raw = self.read_source(source, allow_files=allow_files)
        if raw is None:
            return None
        image = decode_image(raw)
        if image is None:
            LOGGER.warning("Image %s is neither PNG nor JPEG", str(source)[:80])
        return image

    def load_signature(self, source: str | None) -> ImageReader | None:
        """Load a signature from a ``data:`` URI or ``http(s)://`` URL only."""
        return self.load_image(source, allow_files=False)

    def load_report_assets(self, data: MaintenanceReportData) -> ReportAssets:
        """Load logos and signatures one after another."""
        return ReportAssets(
            left_logo=self.load_image(self.left_logo_path),
            right_logo=self.load_image(self.right_logo_path),
            engineer_signature=self.load_signature(data.engineer_signature_url or None),
            site_signature=self.load_signature(data.site_signature_url or None),
        )
