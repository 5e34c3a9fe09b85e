# panel_part.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from PySide6.QtGui import QImage


@dataclass(frozen=True, eq=False)
class ImageAsset:
    """Decoded pixels plus the natural size of the source image.

    Assets are never modified after decode. Equality is identity.
    """
    image: QImage
    width: int
    height: int
    source_url: str

    @classmethod
    def from_image(cls, image: QImage, source_url: str) -> "ImageAsset":
        return cls(image=image, width=image.width(), height=image.height(), source_url=source_url)


@dataclass(frozen=True)
class PanelPart:
    """One image placement within a panel.

    ``x``/``y`` are the panel-local offset of the scaled image's top-left
    corner. They are only meaningful while an asset is attached.
    """
    id: str
    name: str
    image_url: Optional[str] = None
    asset: Optional[ImageAsset] = None
    x: float = 0.0
    y: float = 0.0
    scale: float = 1.0
    rotation: float = 0.0

    @classmethod
    def empty(cls, id: str, name: str) -> "PanelPart":
        return cls(id=id, name=name)

    @property
    def is_renderable(self) -> bool:
        return self.asset is not None

    def cleared(self) -> "PanelPart":
        return PanelPart.empty(self.id, self.name)

    def with_identity_of(self, other: "PanelPart") -> "PanelPart":
        return replace(self, id=other.id, name=other.name)

    def same_content(self, other: "PanelPart") -> bool:
        """Compare everything except the identity fields."""
        return (
            self.image_url == other.image_url
            and self.asset is other.asset
            and self.x == other.x
            and self.y == other.y
            and self.scale == other.scale
            and self.rotation == other.rotation
        )
