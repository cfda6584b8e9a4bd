"""Unit tests for background and font selection."""

import random

from hanbok.services.assets import (
    AssetLibrary,
    AssetRole,
    RoundRobin,
    fisher_yates,
    get_asset_library,
)


class TestShuffling:
    """Test cases for fisher_yates and RoundRobin."""

    def test_fisher_yates_is_permutation(self):
        items = list(range(20))
        shuffled = fisher_yates(items, random.Random(7))
        assert sorted(shuffled) == items
        assert items == list(range(20))

    def test_fisher_yates_seeded(self):
        assert fisher_yates(list("abcdef"), random.Random(3)) == fisher_yates(list("abcdef"), random.Random(3))

    def test_fisher_yates_empty(self):
        assert fisher_yates([]) == []

    def test_round_robin_wraps(self):
        pool = RoundRobin(["a", "b", "c"])
        assert [pool.draw(i) for i in range(7)] == ["a", "b", "c", "a", "b", "c", "a"]

    def test_round_robin_empty(self):
        assert RoundRobin([]).draw(0) is None


class TestAssetLibrary:
    """Test cases for AssetLibrary."""

    def test_images_sorted_and_filtered(self, settings):
        directory = settings.assets_path / settings.hook_slides_subdir
        directory.mkdir()
        for name in ["b.jpg", "a.png", "notes.txt", "c.JPEG"]:
            (directory / name).write_bytes(b"x")

        library = AssetLibrary(settings.assets_path, settings)
        assert [p.name for p in library.images(AssetRole.HOOK)] == ["a.png", "b.jpg", "c.JPEG"]

    def test_missing_directory_is_empty(self, settings):
        library = AssetLibrary(settings.assets_path, settings)
        assert library.images(AssetRole.CTA) == []
        assert library.pick_one(AssetRole.CTA) is None
        assert library.shuffled(AssetRole.CTA) == []

    def test_pick_one(self, asset_library):
        choice = asset_library.pick_one(AssetRole.HOOK, random.Random(1))
        assert choice in asset_library.images(AssetRole.HOOK)

    def test_shuffled_covers_pool(self, asset_library):
        shuffled = asset_library.shuffled(AssetRole.CONTENT, random.Random(5))
        assert sorted(shuffled) == asset_library.images(AssetRole.CONTENT)

    def test_listing_is_cached_until_reload(self, asset_library, settings):
        before = len(asset_library.images(AssetRole.CTA))
        (settings.assets_path / settings.cta_slides_subdir / "new.png").write_bytes(b"x")

        assert len(asset_library.images(AssetRole.CTA)) == before
        asset_library.reload()
        assert len(asset_library.images(AssetRole.CTA)) == before + 1

    def test_data_uri(self, tmp_path, settings):
        png = tmp_path / "bg.png"
        jpg = tmp_path / "bg.jpg"
        png.write_bytes(b"png-bytes")
        jpg.write_bytes(b"jpg-bytes")

        library = AssetLibrary(settings.assets_path, settings)
        assert library.data_uri(png) == "data:image/png;base64,cG5nLWJ5dGVz"
        assert library.data_uri(jpg).startswith("data:image/jpeg;base64,")
        assert library.data_uri(None) is None

    def test_font_css(self, settings):
        fonts = settings.assets_path / settings.fonts_subdir
        fonts.mkdir()
        (fonts / "Jua.ttf").write_bytes(b"ttf")
        (fonts / "Hahmlet.otf").write_bytes(b"otf")
        (fonts / "README.md").write_text("not a font")

        css = AssetLibrary(settings.assets_path, settings).font_css()
        assert css.count("@font-face") == 2
        assert "font-family: 'Jua'" in css
        assert "format('truetype')" in css
        assert "font-family: 'Hahmlet'" in css
        assert "format('opentype')" in css
        assert "data:font/ttf;base64," in css

    def test_font_css_skips_unsafe_family_names(self, settings):
        fonts = settings.assets_path / settings.fonts_subdir
        fonts.mkdir()
        (fonts / "Noto Sans KR-Bold.ttf").write_bytes(b"ttf")
        (fonts / "evil'name.ttf").write_bytes(b"ttf")
        (fonts / "x<style>.otf").write_bytes(b"otf")

        css = AssetLibrary(settings.assets_path, settings).font_css()
        assert css.count("@font-face") == 1
        assert "font-family: 'Noto Sans KR-Bold'" in css
        assert "evil" not in css
        assert "<style>" not in css

    def test_font_css_without_fonts_dir(self, settings):
        assert AssetLibrary(settings.assets_path, settings).font_css() == ""

    def test_shared_library_per_root(self, settings):
        assert get_asset_library() is get_asset_library(settings.assets_path)
