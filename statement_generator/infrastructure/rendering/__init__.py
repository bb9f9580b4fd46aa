"""Rendering surfaces that execute page instruction streams."""

from .asset_store import AssetStore
from .base_surface import RenderingSurface
from .recording_surface import RecordingSurface
from .reportlab_surface import ReportLabSurface

__all__ = [
    "AssetStore",
    "RenderingSurface",
    "RecordingSurface",
    "ReportLabSurface",
]
