import numpy as np

from swiv.config.constants import DEFAULT_BACKGROUND
from swiv.models.frame import Frame


def test_new_frame_is_filled_with_background():
    frame = Frame(3, 2, background=0xFF112233)
    assert frame.size == (3, 2)
    assert frame.buffer.dtype == np.uint32
    assert frame.buffer.tolist() == [0xFF112233] * 6


def test_default_frame_is_empty():
    frame = Frame()
    assert frame.size == (0, 0)
    assert frame.buffer.size == 0
    assert frame.background == DEFAULT_BACKGROUND


def test_resize_to_same_size_is_a_no_op():
    frame = Frame(2, 2)
    buffer = frame.buffer
    assert frame.resize(2, 2) is False
    assert frame.buffer is buffer


def test_resize_keeps_prefix_and_pads_with_background():
    frame = Frame(2, 2, background=7)
    frame.buffer[:] = [1, 2, 3, 4]
    assert frame.resize(3, 2) is True
    assert frame.buffer.tolist() == [1, 2, 3, 4, 7, 7]
    frame.resize(1, 1)
    assert frame.buffer.tolist() == [1]


def test_negative_sizes_clamp_to_zero():
    frame = Frame(-3, 4)
    assert frame.size == (0, 4)
    frame.resize(5, -1)
    assert frame.size == (5, 0)
    assert frame.buffer.size == 0


def test_repr():
    assert repr(Frame(4, 3, background=0xFF00FF00)) == "Frame(4x3, background=0xFF00FF00)"
