import numpy as np
import pytest

from flashlight.reveal import CompletionDetector, RevealAccumulator, TextMask


def _pair(revealed: int, total: int = 100):
    mask = TextMask(np.full((10, total // 10), 255, dtype=np.uint8))
    acc = RevealAccumulator(mask)
    covered = np.arange(total).reshape(mask.alpha.shape) < revealed
    acc.surface.pixels[..., 3] = covered.astype(np.uint8) * 255
    return mask, acc


@pytest.mark.parametrize("incremental", [True, False])
def test_exactly_threshold_completes(incremental):
    mask, acc = _pair(92)
    detector = CompletionDetector(mask, acc, threshold=0.92, incremental=incremental)
    assert detector.check() is True
    assert detector.complete


@pytest.mark.parametrize("incremental", [True, False])
def test_just_below_threshold_does_not_complete(incremental):
    mask, acc = _pair(91)
    detector = CompletionDetector(mask, acc, threshold=0.92, incremental=incremental)
    assert detector.check() is False
    assert detector.progress() == pytest.approx(0.91)


def test_no_text_never_completes():
    mask = TextMask(np.zeros((5, 5), dtype=np.uint8))
    acc = RevealAccumulator(mask)
    acc.surface.pixels[..., 3] = 255
    detector = CompletionDetector(mask, acc, threshold=0.0)
    assert detector.progress() is None
    assert detector.check() is False


def test_faint_pixels_below_alpha_threshold_are_not_text():
    alpha = np.full((4, 4), 20, dtype=np.uint8)
    alpha[0, 0] = 21
    mask = TextMask(alpha)
    acc = RevealAccumulator(mask)
    detector = CompletionDetector(mask, acc, alpha_threshold=20)
    assert detector.text_pixels == 1


def test_listeners_fire_once():
    mask, acc = _pair(100)
    detector = CompletionDetector(mask, acc)
    calls = []
    detector.on_complete(lambda: calls.append(1))
    for _ in range(3):
        detector.check()
    assert calls == [1]


def test_full_sweep_reaches_one_and_fires_once(block_mask, accumulator):
    detector = CompletionDetector(block_mask, accumulator)
    calls = []
    detector.on_complete(lambda: calls.append(1))
    for _ in range(2):  # keep sweeping after completion
        for y in range(0, 21, 4):
            for x in range(0, 41, 4):
                detector.record(accumulator.stamp(x, y, 4))
                detector.check()
    assert detector.progress() == 1.0
    assert calls == [1]


def test_running_count_matches_full_scan(block_mask, accumulator):
    fast = CompletionDetector(block_mask, accumulator, threshold=2.0, incremental=True)
    for x in (12, 17, 17, 25):
        fast.record(accumulator.stamp(x, 9, 3))
    slow = CompletionDetector(block_mask, accumulator, threshold=2.0, incremental=False)
    slow.check()
    assert fast._revealed == slow._revealed
