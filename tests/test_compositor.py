import numpy as np
import pytest

from flashlight.api import Point, RevealConfig
from flashlight.raster import CompositeMode, RasterSurface
from flashlight.reveal import ColoredTextLayer, CompletionDetector, CompositorRenderer
from flashlight.reveal.compositor import radial_halo

PINK = (236, 72, 153)


@pytest.fixture
def renderer(block_mask, accumulator):
    rgba = np.zeros((20, 40, 4), dtype=np.uint8)
    rgba[..., :3] = PINK
    rgba[..., 3] = block_mask.alpha
    colored = ColoredTextLayer(rgba)
    detector = CompletionDetector(block_mask, accumulator)
    cfg = RevealConfig(flashlight_radius=6)
    return CompositorRenderer(RasterSurface(40, 20), accumulator, colored, detector, cfg)


def test_nothing_visible_before_any_reveal(renderer):
    assert renderer.render() is True
    assert not renderer.canvas.alpha.any()


def test_revealed_text_shows_in_full_color(renderer, accumulator):
    accumulator.stamp(20, 10, 3)
    renderer.render()
    canvas = renderer.canvas
    assert np.array_equal(canvas.alpha > 0, accumulator.alpha > 0)
    assert canvas.alpha[10, 20] == 255
    assert tuple(canvas.pixels[10, 20, :3]) == PINK


def test_halo_is_not_persisted(renderer, accumulator):
    accumulator.stamp(20, 10, 3)
    renderer.render()
    baseline = renderer.canvas.pixels.copy()

    renderer.render(Point(14, 8))
    assert not np.array_equal(renderer.canvas.pixels, baseline)
    renderer.render(None)
    assert np.array_equal(renderer.canvas.pixels, baseline)


def test_halo_shows_text_faintly_and_leaves_background_dark(renderer):
    renderer.render(Point(14, 6))
    # unrevealed glyph under the halo core
    assert 0 < renderer.canvas.alpha[6, 14] < 255
    # inside the halo but off the glyph
    assert renderer.canvas.alpha[2, 14] == 0


def test_pointer_far_away_draws_no_halo(renderer):
    renderer.render(Point(-500, 10))
    assert not renderer.canvas.alpha.any()


def test_render_is_frozen_once_complete(renderer, accumulator):
    accumulator.stamp(20, 10, 3)
    renderer.render()
    frame = renderer.canvas.pixels.copy()
    renderer.detector.complete = True

    assert renderer.render(Point(12, 6)) is False
    assert np.array_equal(renderer.canvas.pixels, frame)


def test_radial_halo_fades_out_at_radius():
    halo, (x0, y0) = radial_halo(50.0, 50.0, 10, (148, 163, 184), ((0, 0.25), (0.5, 0.08), (1, 0)))
    cx, cy = 50 - x0, 50 - y0
    assert halo.alpha[cy, cx] == 64
    assert halo.alpha[cy, cx + 5] == 20
    assert halo.alpha[cy, cx + 10] == 0
    assert halo.alpha[0, 0] == 0


def test_pixels_outside_halo_box_come_from_revealed_cache(renderer, accumulator):
    accumulator.stamp(20, 10, 3)
    renderer.render(Point(14, 8))
    # halo of radius 6 at (14, 8) spans x 8..21, y 2..15
    outside = np.ones((20, 40), dtype=bool)
    outside[2:16, 8:22] = False
    assert np.array_equal(renderer.canvas.pixels[outside], renderer.revealed.pixels[outside])
    assert not np.array_equal(renderer.canvas.pixels[~outside], renderer.revealed.pixels[~outside])


def test_render_only_blends_small_regions(renderer, accumulator, monkeypatch):
    blended = []
    real_composite = RasterSurface.composite

    def spy(self, src, mode=CompositeMode.OVER, at=(0, 0)):
        blended.append(self.width * self.height)
        return real_composite(self, src, mode, at)

    monkeypatch.setattr(RasterSurface, "composite", spy)
    accumulator.stamp(20, 10, 3)
    renderer.render(Point(14, 8))
    assert blended
    assert max(blended) <= 14 * 14
