import threading
import time

import numpy as np
import pytest

from flashlight.api import RevealConfig
from flashlight.raster import SurfaceUnavailableError
from flashlight.reveal import TextMaskGenerator
from flashlight.reveal import text_mask
from flashlight.reveal.text_mask import choose_font_size, wrap_text

NO_SUCH_FONT = RevealConfig(font_family="No Such Font Family Xyzzy", font_load_timeout=1.0)


def test_wrap_greedy_by_measured_width():
    assert wrap_text("aa bb cc", 5, len) == ["aa bb", "cc"]
    assert wrap_text("  aa   bb  ", 10, len) == ["aa bb"]


def test_wrap_long_word_gets_its_own_line():
    assert wrap_text("x abcdefghij y", 5, len) == ["x", "abcdefghij", "y"]


def test_wrap_empty_message():
    assert wrap_text("", 100, len) == []


@pytest.mark.parametrize("width,expected", [(200, 32), (450, 45), (1000, 56)])
def test_font_size_is_clamped(width, expected):
    assert choose_font_size(width, RevealConfig()) == expected


def test_missing_font_falls_back_silently():
    gen = TextMaskGenerator(NO_SUCH_FONT)
    mask, colored = gen.generate("HELLO THERE", (400, 200))
    assert gen.used_fallback
    assert mask.text_pixels(20) > 0


def test_slow_font_lookup_falls_back(monkeypatch):
    def stalled(*args):
        time.sleep(1.0)
        return "never-used.ttf"

    monkeypatch.setattr(text_mask, "_resolve_font_path", stalled)
    gen = TextMaskGenerator(RevealConfig(font_load_timeout=0.05))
    started = time.monotonic()
    mask, _ = gen.generate("HI", (200, 100))
    assert time.monotonic() - started < 0.9
    assert gen.used_fallback
    assert mask.text_pixels(20) > 0


def test_layers_share_size_and_alignment():
    mask, colored = TextMaskGenerator(NO_SUCH_FONT).generate("GLOW", (300, 120))
    assert mask.size == colored.size == (300, 120)
    text = mask.alpha > 20
    assert np.all(colored.surface.alpha[text] > 0)
    assert tuple(colored.surface.pixels[text][0, :3]) == NO_SUCH_FONT.text_color
    # glow bleeds past the glyphs
    assert np.count_nonzero(colored.surface.alpha) > np.count_nonzero(mask.alpha)


def test_block_is_vertically_centered():
    mask, _ = TextMaskGenerator(NO_SUCH_FONT).generate("HI", (200, 200))
    rows = np.nonzero(mask.alpha > 20)[0]
    assert abs((rows.min() + rows.max()) / 2 - 100) < 16


def test_long_message_wraps_within_max_width():
    gen = TextMaskGenerator(NO_SUCH_FONT)
    mask, _ = gen.generate("THE QUICK BROWN FOX JUMPS OVER THE LAZY DOG", (320, 400))
    assert len(gen.lines) > 1
    cols = np.nonzero(mask.alpha > 20)[1]
    assert cols.max() - cols.min() <= 320 * 0.9 + 2


def test_density_scales_canvas():
    mask, colored = TextMaskGenerator(NO_SUCH_FONT).generate("HI", (100, 50), pixel_density=2.0)
    assert mask.size == (200, 100)


def test_mask_is_read_only():
    mask, _ = TextMaskGenerator(NO_SUCH_FONT).generate("HI", (100, 50))
    with pytest.raises(ValueError):
        mask.alpha[0, 0] = 255


def test_empty_container_has_no_surface():
    with pytest.raises(SurfaceUnavailableError):
        TextMaskGenerator(NO_SUCH_FONT).generate("HI", (0, 50))


def test_slow_font_open_falls_back(monkeypatch):
    def stalled(path, size_px):
        time.sleep(1.0)

    monkeypatch.setattr(text_mask, "_resolve_font_path", lambda *args: "some.ttf")
    monkeypatch.setattr(text_mask, "_open_font", stalled)
    started = time.monotonic()
    font, used_fallback = text_mask.load_font(RevealConfig(font_load_timeout=0.05), 24)
    assert time.monotonic() - started < 0.9
    assert used_fallback
    assert font.size("HI")[0] > 0


def test_hung_font_loader_does_not_block_exit(monkeypatch):
    release = threading.Event()

    def hung(*args):
        release.wait(5.0)
        return "never-used.ttf"

    monkeypatch.setattr(text_mask, "_resolve_font_path", hung)
    try:
        _, used_fallback = text_mask.load_font(RevealConfig(font_load_timeout=0.05), 24)
        assert used_fallback
        loaders = [t for t in threading.enumerate() if t.name == "font-loader" and t.is_alive()]
        assert loaders
        assert all(t.daemon for t in loaders)
    finally:
        release.set()
