"""
Background image and font selection from the curated asset directories.

Directory listings, font CSS and data URIs are read once per process and
kept until `reload()` is called.
"""

import base64
import logging
import random
import re
from enum import Enum
from pathlib import Path

from hanbok.config import get_settings

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg"}
FONT_FORMATS = {
    ".ttf": ("font/ttf", "truetype"),
    ".otf": ("font/otf", "opentype"),
}
# Family names are written into CSS string literals as-is
FONT_FAMILY_NAME = re.compile(r"\w[\w \-]*")


class AssetRole(str, Enum):
    HOOK = "hook"
    CONTENT = "content"
    CTA = "cta"
    CHEAT_SHEET_HOOK = "cheat-sheet-hook"
    CHEAT_SHEET_BACKGROUND = "cheat-sheet-background"


def fisher_yates(items: list, rng: random.Random | None = None) -> list:
    """Uniform permutation of a copy of `items`."""
    rng = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


class RoundRobin:
    """Draw from a pool by slide position, wrapping when the pool runs out."""

    def __init__(self, pool: list):
        self.pool = list(pool)

    def draw(self, index: int):
        if not self.pool:
            return None
        return self.pool[index % len(self.pool)]


class AssetLibrary:
    """Images per slide role and embedded fonts under one assets root."""

    def __init__(self, root: str | Path, settings=None):
        settings = settings or get_settings()
        self.root = Path(root)
        self.fonts_dir = self.root / settings.fonts_subdir
        self.role_dirs = {
            AssetRole.HOOK: self.root / settings.hook_slides_subdir,
            AssetRole.CONTENT: self.root / settings.content_slides_subdir,
            AssetRole.CTA: self.root / settings.cta_slides_subdir,
            AssetRole.CHEAT_SHEET_HOOK: self.root / settings.cheat_sheet_hook_subdir,
            AssetRole.CHEAT_SHEET_BACKGROUND: self.root / settings.cheat_sheet_backgrounds_subdir,
        }
        self._images: dict[Path, list[Path]] = {}
        self._data_uris: dict[Path, str] = {}
        self._font_css: str | None = None

    def directory(self, role: AssetRole) -> Path:
        return self.role_dirs[AssetRole(role)]

    def images(self, role: AssetRole) -> list[Path]:
        """Sorted image files for a role. A missing or empty directory gives []."""
        directory = self.directory(role)
        if directory not in self._images:
            self._images[directory] = self._scan_images(directory)
        return list(self._images[directory])

    @staticmethod
    def _scan_images(directory: Path) -> list[Path]:
        if not directory.is_dir():
            logger.warning(f"Asset directory {directory} does not exist")
            return []
        files = sorted(
            path for path in directory.iterdir()
            if path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS
        )
        if not files:
            logger.warning(f"No images found in {directory}")
        else:
            logger.debug(f"Indexed {len(files)} images in {directory}")
        return files

    def pick_one(self, role: AssetRole, rng: random.Random | None = None) -> Path | None:
        """Uniform random image for a role, or None."""
        files = self.images(role)
        if not files:
            return None
        chosen = (rng or random).choice(files)
        logger.debug(f"Picked {chosen.name} for {AssetRole(role).value}")
        return chosen

    def shuffled(self, role: AssetRole, rng: random.Random | None = None) -> list[Path]:
        """Every image for a role in random order."""
        return fisher_yates(self.images(role), rng)

    def data_uri(self, path: str | Path | None) -> str | None:
        """Inline an image as a base64 data URI."""
        if path is None:
            return None
        path = Path(path)
        if path not in self._data_uris:
            ext = path.suffix.lower().lstrip(".")
            mime = "jpeg" if ext == "jpg" else ext
            encoded = base64.b64encode(path.read_bytes()).decode("ascii")
            self._data_uris[path] = f"data:image/{mime};base64,{encoded}"
        return self._data_uris[path]

    def font_css(self) -> str:
        """One @font-face rule per .ttf/.otf file, family named after the file stem."""
        if self._font_css is None:
            self._font_css = self._build_font_css()
        return self._font_css

    def _build_font_css(self) -> str:
        if not self.fonts_dir.is_dir():
            logger.warning(f"Fonts directory {self.fonts_dir} does not exist")
            return ""

        rules = []
        for path in sorted(self.fonts_dir.iterdir()):
            fmt = FONT_FORMATS.get(path.suffix.lower())
            if fmt is None or not path.is_file():
                continue
            if not FONT_FAMILY_NAME.fullmatch(path.stem):
                logger.warning(f"Skipping font with unusable family name: {path.name!r}")
                continue
            mime, css_format = fmt
            encoded = base64.b64encode(path.read_bytes()).decode("ascii")
            rules.append(
                "@font-face {\n"
                f"  font-family: '{path.stem}';\n"
                f"  src: url('data:{mime};base64,{encoded}') format('{css_format}');\n"
                "  font-display: block;\n"
                "}"
            )
            logger.info(f"Loaded font: {path.stem}")
        return "\n".join(rules)

    def reload(self):
        self._images.clear()
        self._data_uris.clear()
        self._font_css = None


_libraries: dict[Path, AssetLibrary] = {}


def get_asset_library(root: str | Path | None = None) -> AssetLibrary:
    """Process-wide library for an assets root (defaults to the configured one)."""
    root = Path(root) if root is not None else get_settings().assets_path
    key = root.resolve()
    if key not in _libraries:
        _libraries[key] = AssetLibrary(root)
    return _libraries[key]


def reload():
    """Forget every cached listing, font and data URI."""
    for library in _libraries.values():
        library.reload()
    _libraries.clear()
