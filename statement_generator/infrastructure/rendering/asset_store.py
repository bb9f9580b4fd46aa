"""Locates institution branding images on disk."""

from pathlib import Path
from typing import Optional

from statement_generator.shared.utils.logging_config import get_logger

logger = get_logger(__name__)

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg")


class AssetStore:
    """
    Callable asset locator: ``store("PNB")`` returns the path of ``pnb.png``
    (or ``.jpg``/``.jpeg``) under the asset directory, or None.
    """

    def __init__(self, asset_dir: str):
        self.asset_dir = Path(asset_dir)

    def __call__(self, name: str) -> Optional[str]:
        if not self.asset_dir.is_dir():
            logger.debug(f"Asset directory {self.asset_dir} does not exist")
            return None

        stem = name.strip().lower()
        for extension in IMAGE_EXTENSIONS:
            candidate = self.asset_dir / f"{stem}{extension}"
            if candidate.is_file():
                return str(candidate)
        return None
