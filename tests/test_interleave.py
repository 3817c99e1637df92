import os
import subprocess
import sys

import numpy as np
import pytest

from image_combiner.errors import ImageCombineError, InterleaveFault
from image_combiner.image import Image
from image_combiner.interleave import alternate_windows, combine, plan_windows


def _reference(buf_1, buf_2):
    # byte k belongs to the window starting at k - k % 4
    picks_first = (np.arange(len(buf_1)) // 4) % 2 == 0
    return np.where(picks_first, buf_1, buf_2[:len(buf_1)])


def test_sixteen_bytes_alternate_in_blocks_of_four():
    buf_1 = np.arange(16, dtype=np.uint8)
    buf_2 = np.arange(100, 116, dtype=np.uint8)
    out = alternate_windows(buf_1, buf_2)
    assert out.tolist() == [0, 1, 2, 3, 104, 105, 106, 107, 8, 9, 10, 11, 112, 113, 114, 115]


def test_short_final_window():
    buf_1 = np.arange(10, dtype=np.uint8)
    buf_2 = np.arange(50, 60, dtype=np.uint8)
    out = alternate_windows(buf_1, buf_2)
    assert out.tolist() == [0, 1, 2, 3, 54, 55, 56, 57, 8, 9]

    out = alternate_windows(buf_1[:6], buf_2[:6])
    assert out.tolist() == [0, 1, 2, 3, 54, 55]


@pytest.mark.parametrize("length", [1, 3, 4, 5, 12, 13, 27, 300])
def test_output_length_and_sources(length):
    rng = np.random.default_rng(length)
    buf_1 = rng.integers(0, 256, size=length, dtype=np.uint8)
    buf_2 = rng.integers(0, 256, size=length, dtype=np.uint8)
    out = alternate_windows(buf_1, buf_2)
    assert out.shape == (length,)
    np.testing.assert_array_equal(out, _reference(buf_1, buf_2))


def test_empty_buffers():
    out = alternate_windows(np.empty(0, dtype=np.uint8), np.empty(0, dtype=np.uint8))
    assert out.shape == (0,)


def test_accepts_bytes():
    assert bytes(alternate_windows(b"abcdefgh", b"ABCDEFGH")) == b"abcdEFGH"


def test_inputs_are_not_modified():
    buf_1 = np.zeros(8, dtype=np.uint8)
    buf_2 = np.ones(8, dtype=np.uint8)
    alternate_windows(buf_1, buf_2)
    assert buf_1.sum() == 0
    assert buf_2.sum() == 8


def test_plan_windows_clamps_last_window():
    starts, ends = plan_windows(10, 10)
    assert starts.tolist() == [0, 4, 8]
    assert ends.tolist() == [3, 7, 9]


def test_short_second_buffer_is_a_fault():
    with pytest.raises(InterleaveFault) as excinfo:
        alternate_windows(np.zeros(8, dtype=np.uint8), np.zeros(5, dtype=np.uint8))
    fault = excinfo.value
    assert (fault.length, fault.start, fault.end) == (5, 4, 7)
    assert not isinstance(fault, ImageCombineError)


def test_second_buffer_unused_when_only_one_window():
    out = alternate_windows(np.arange(4, dtype=np.uint8), np.empty(0, dtype=np.uint8))
    assert out.tolist() == [0, 1, 2, 3]


def test_combine_images():
    pixels_1 = np.arange(12, dtype=np.uint8).reshape(2, 2, 3)
    pixels_2 = np.arange(200, 212, dtype=np.uint8).reshape(2, 2, 3)
    out = combine(Image.from_array(pixels_1), Image.from_array(pixels_2))
    assert out.tolist() == [0, 1, 2, 3, 204, 205, 206, 207, 8, 9, 10, 11]


_THREADED_COMBINE = """
import threading
import numpy as np
from image_combiner.interleave import alternate_windows

result = []
worker = threading.Thread(target=lambda: result.append(
    alternate_windows(np.arange(16, dtype=np.uint8), np.arange(100, 116, dtype=np.uint8))))
worker.start()
worker.join()
print(result[0].tolist())
"""


def test_process_exits_after_combine_on_worker_thread():
    root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    completed = subprocess.run(
        [sys.executable, "-c", _THREADED_COMBINE],
        cwd=root, capture_output=True, text=True, timeout=120,
    )
    assert completed.returncode == 0, completed.stderr
    assert completed.stdout.strip() == str([0, 1, 2, 3, 104, 105, 106, 107, 8, 9, 10, 11, 112, 113, 114, 115])
