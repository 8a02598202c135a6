"""
Content Scaling

Compresses or expands the rendered content uniformly while keeping the
visible page one physical page. The content is drawn scale times its natural
size, and its layout box is widened/lengthened by 1/scale to compensate, so
a scale below 1 fits more content on the same page and a scale above 1
fits less. Projection code never needs to know about pagination.
"""

from dataclasses import dataclass
from typing import Dict

from quill.utils.config import get_settings

PAGE_HEIGHT_MM = float(get_settings().export.page.height_mm)


def _fmt(value: float) -> str:
    """Compact number for CSS: 100.0 -> '100', 133.3333333 -> '133.3333'."""
    return f"{value:.4f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class ScaleTransform:
    """
    Transform applied to the content block of every template.

    Attributes:
        scale: Visual scale factor
        width_percent: Layout width of the content, percent of the page width
        min_height_mm: Layout minimum height of the content
        transform_origin: Anchor of the scale transform
    """

    scale: float
    width_percent: float
    min_height_mm: float
    transform_origin: str = "top left"

    @classmethod
    def from_scale(cls, scale: float, page_height_mm: float = PAGE_HEIGHT_MM) -> "ScaleTransform":
        """
        Raises:
            ValueError: If scale is not positive
        """
        if scale <= 0:
            raise ValueError(f"Scale must be positive, got {scale}")
        return cls(
            scale=scale,
            width_percent=100 / scale,
            min_height_mm=page_height_mm / scale,
        )

    @classmethod
    def identity(cls, page_height_mm: float = PAGE_HEIGHT_MM) -> "ScaleTransform":
        """Transform of an unscaled render."""
        return cls(scale=1.0, width_percent=100.0, min_height_mm=page_height_mm)

    @property
    def visible_width_percent(self) -> float:
        return self.width_percent * self.scale

    @property
    def visible_min_height_mm(self) -> float:
        return self.min_height_mm * self.scale

    def as_style(self) -> Dict[str, str]:
        """CSS declarations for the scaled content block."""
        return {
            "width": f"{_fmt(self.width_percent)}%",
            "transform": f"scale({_fmt(self.scale)})",
            "transform-origin": self.transform_origin,
            "min-height": f"{_fmt(self.min_height_mm)}mm",
        }
