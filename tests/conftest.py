import os
import tempfile

import cv2
import numpy as np
import pytest

# The backend reads these at import time.
_BACKEND_ROOT = tempfile.mkdtemp(prefix="image_combiner_tests_")
os.environ.setdefault("INPUT_DIR", os.path.join(_BACKEND_ROOT, "input"))
os.environ.setdefault("OUTPUTS_DIR", os.path.join(_BACKEND_ROOT, "output"))


def rgb_pattern(width, height, seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)


def encode_rgb(rgb, ext=".png"):
    ok, encoded = cv2.imencode(ext, cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
    assert ok
    return encoded.tobytes()


@pytest.fixture
def write_image(tmp_path):
    def _write(name, rgb):
        path = tmp_path / name
        path.write_bytes(encode_rgb(rgb, os.path.splitext(name)[1]))
        return path
    return _write
