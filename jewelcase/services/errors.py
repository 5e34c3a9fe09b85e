# errors.py
from __future__ import annotations


class JewelCaseError(Exception):
    """Base class for everything jewelcase raises on purpose."""


class AssetLoadError(JewelCaseError, ValueError):
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Could not load image {_short(url)}: {reason}")


class InvalidPaperSize(JewelCaseError, ValueError):
    def __init__(self, key):
        self.key = key
        super().__init__(f"Invalid paper size: {key}")


class ExportStageError(JewelCaseError):
    """A single export stage failed; the export carries on without it."""
    action = "export"

    def __init__(self, stage: str, cause: BaseException):
        self.stage = stage
        self.cause = cause
        super().__init__(f"Failed to {self.action} {stage}: {cause}")


class StageRasterizationError(ExportStageError):
    action = "rasterize"


class StageEmbedError(ExportStageError):
    action = "embed"


def _short(url: str, limit: int = 64) -> str:
    # data URLs can be megabytes long
    return url if len(url) <= limit else url[:limit] + "..."
