#!/usr/bin/env python3
"""
Create the asset directories the renderer reads from and report what is missing.
Run this before starting the server.
"""

import sys

from hanbok.config import get_settings
from hanbok.services.assets import FONT_FORMATS, AssetLibrary, AssetRole

EXPECTED_FONTS = ["TikTokSans", "Fredoka", "Jua", "Hahmlet"]


def setup_directories(library: AssetLibrary):
    """Create the fonts directory and one directory per background role."""
    print("Creating directories...")
    library.fonts_dir.mkdir(parents=True, exist_ok=True)
    for directory in library.role_dirs.values():
        directory.mkdir(parents=True, exist_ok=True)
    get_settings().output_path.mkdir(parents=True, exist_ok=True)
    print("✓ Directories created")


def check_assets(library: AssetLibrary) -> bool:
    """Print per-role image counts and font status. True when nothing is missing."""
    print("\nAsset Status:")
    ready = True

    for role in AssetRole:
        count = len(library.images(role))
        directory = library.directory(role)
        if count:
            print(f"✓ {role.value}: {count} images in {directory}")
        else:
            ready = False
            print(f"✗ {role.value}: no images")
            print(f"  → Place .png/.jpg backgrounds in: {directory}")

    installed = {
        path.stem for path in library.fonts_dir.iterdir()
        if path.suffix.lower() in FONT_FORMATS
    } if library.fonts_dir.is_dir() else set()

    for family in EXPECTED_FONTS:
        if family in installed:
            print(f"✓ {family} found")
        else:
            ready = False
            print(f"✗ {family} MISSING")
            print(f"  → Download from https://fonts.google.com/specimen/{family}")
            print(f"  → Save it as {library.fonts_dir / (family + '.ttf')}")

    return ready


def main():
    print("=" * 50)
    print("Hanbok Slides - Asset Setup")
    print("=" * 50)
    print()

    library = AssetLibrary(get_settings().assets_path)
    setup_directories(library)
    all_ready = check_assets(library)

    print()
    print("=" * 50)
    if all_ready:
        print("✓ All assets ready! You can start the server.")
    else:
        print("⚠ Some assets are missing.")
        print("  Slides without a background image fall back to a gradient.")
    print("=" * 50)
    return 0 if all_ready else 1


if __name__ == "__main__":
    sys.exit(main())
