# image_loader.py
from __future__ import annotations

import asyncio
import base64
import binascii
import logging
from pathlib import Path
from urllib.parse import unquote, unquote_to_bytes, urlparse

from PySide6.QtGui import QImage

from jewelcase.models.panel_part import ImageAsset
from jewelcase.services.errors import AssetLoadError
from jewelcase.utils.valid_path import ValidPath

log = logging.getLogger(__name__)


def read_image_bytes(url: str) -> bytes:
    """Resolve a ``data:`` URL, ``file://`` URL or plain path to raw bytes."""
    if url.startswith("data:"):
        header, sep, payload = url.partition(",")
        if not sep:
            raise AssetLoadError(url, "malformed data URL")
        if header.endswith(";base64"):
            try:
                return base64.b64decode(payload, validate=True)
            except (binascii.Error, ValueError) as e:
                raise AssetLoadError(url, f"bad base64 payload ({e})") from e
        return unquote_to_bytes(payload)

    if url.startswith("file://"):
        path = Path(unquote(urlparse(url).path))
    else:
        path = Path(url)

    p = ValidPath.check(path, must_exist=True, require_file=True, normalize=True)
    if p is None:
        raise AssetLoadError(url, "no such file")
    try:
        return p.read_bytes()
    except OSError as e:
        raise AssetLoadError(url, str(e)) from e


def decode_image(url: str) -> ImageAsset:
    data = read_image_bytes(url)
    image = QImage.fromData(data)
    if image.isNull():
        raise AssetLoadError(url, "unsupported or corrupt image data")
    log.debug("Decoded %dx%d image", image.width(), image.height())
    return ImageAsset.from_image(image, url)


class ImageLoader:
    """Decodes images off the event loop.

    ``load`` resolves to an ``ImageAsset`` or raises ``AssetLoadError``.
    Loads for different panels run independently and settle in any order.
    """

    async def load(self, url: str) -> ImageAsset:
        if not url:
            raise AssetLoadError(url or "", "empty URL")
        return await asyncio.to_thread(decode_image, url)
