from __future__ import annotations

import numpy as np
import pytest

from dungeondraw.export.preview import GaussianBlur, hex_to_rgb


def test_hex_to_rgb() -> None:
    assert hex_to_rgb(0xFF0080) == pytest.approx((1.0, 0.0, 128 / 255.0))


def test_gaussian_blur_spreads_and_pads() -> None:
    image = np.zeros((21, 21, 4), dtype=float)
    image[10, 10, :] = 1.0
    blurred, ox, oy = GaussianBlur(2.0)(image, dpi=72.0)
    pad = -ox
    assert ox == oy and pad >= 6
    assert blurred.shape == (21 + 2 * pad, 21 + 2 * pad, 4)
    # Channels are blurred independently; spatial mass is preserved.
    assert blurred[..., 3].sum() == pytest.approx(1.0, rel=1e-3)
    centre = blurred[10 + pad, 10 + pad, 3]
    assert 0.0 < centre < 1.0
    assert blurred[10 + pad, 12 + pad, 3] > 0.0
