"""
Нормализация высот из пикселей и байтов RAW-файлов.

All functions are pure and work on Python scalars as well as numpy arrays.
Normalized values lie in [0, 1] and are mapped to [min_height, max_height]
with ``rescale``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from shared.constants import (
    HEIGHT_DTYPE,
    PACKED_24BIT_MAX,
    PACKED_HEIGHT_SCALE,
    PACKED_HIGH_WEIGHT,
    PACKED_LOW_WEIGHT,
    RAW8_MAX,
    RAW16_MAX,
    RAW_BITS_8,
    RAW_BITS_16,
)

if TYPE_CHECKING:
    from numpy.typing import ArrayLike


def normalized_height_packed(r: ArrayLike, g: ArrayLike, b: ArrayLike):
    """
    Normalized height of a 24-bit packed pixel.

    normalized = (256*R + G + B/256) / 65536

    Exact for images written by the packing encoder. Plain grayscale
    images (R = G = B = x) also decode, within about 0.4% of x/255.
    """
    return (PACKED_HIGH_WEIGHT * r + g + PACKED_LOW_WEIGHT * b) / PACKED_HEIGHT_SCALE


def normalized_height_raw16(lo: ArrayLike, hi: ArrayLike):
    """Normalized height of a little-endian 16-bit sample split into bytes."""
    lo = np.asarray(lo, dtype=np.uint16)
    hi = np.asarray(hi, dtype=np.uint16)
    return (lo | (hi << 8)) / RAW16_MAX


def normalized_height_raw8(value: ArrayLike):
    """Normalized height of an 8-bit sample."""
    return np.asarray(value, dtype=np.float64) / RAW8_MAX


def rescale(normalized: ArrayLike, min_height: float, max_height: float):
    """Map normalized heights onto [min_height, max_height] in float64."""
    scaled = min_height + np.asarray(normalized, dtype=np.float64) * (
        max_height - min_height
    )
    # Отсекаем погрешность округления на краях диапазона
    return np.clip(scaled, min_height, max_height)


def infer_raw_bit_depth(file_size: int, width: int, height: int) -> int:
    """
    Bits per element of a headerless RAW file.

    Uses integer division, so trailing bytes that do not fill a whole
    element are ignored: 1.5 bytes per element reads as 8-bit.
    """
    return (file_size // (width * height)) * 8


def decode_packed_pixels(pixels: np.ndarray) -> np.ndarray:
    """
    Decode an ``(h, w, channels)`` uint8 pixel array into normalized heights.

    Only the first three channels are used; alpha is ignored.
    """
    arr = np.asarray(pixels, dtype=np.float64)
    return normalized_height_packed(arr[:, :, 0], arr[:, :, 1], arr[:, :, 2])


def decode_raw_samples(data: bytes, width: int, height: int, bits: int) -> np.ndarray:
    """
    Decode the first width*height RAW samples into an ``(h, w)`` array.

    Rows are returned in file order (bottom row first).
    """
    count = width * height
    if bits == RAW_BITS_16:
        raw = np.frombuffer(data, dtype=np.uint8, count=2 * count)
        # Пары байтов little-endian: младший байт первый
        normalized = normalized_height_raw16(raw[0::2], raw[1::2])
    elif bits == RAW_BITS_8:
        samples = np.frombuffer(data, dtype=np.uint8, count=count)
        normalized = normalized_height_raw8(samples)
    else:
        msg = f'Unsupported RAW bit depth: {bits}'
        raise ValueError(msg)
    return normalized.reshape(height, width)


def to_top_left_origin(normalized: np.ndarray) -> np.ndarray:
    """Flip a bottom-row-first ``(h, w)`` array to top-row-first."""
    return np.flipud(normalized)


def pack_normalized_height(normalized: ArrayLike) -> tuple:
    """
    Nearest (R, G, B) encoding of a normalized height.

    Inverse of ``normalized_height_packed``; inputs outside [0, 1] are clipped.
    Works element-wise on arrays, returning a tuple of uint8 arrays.
    """
    value = np.clip(np.asarray(normalized, dtype=np.float64), 0.0, 1.0)
    total = np.rint(value * PACKED_HEIGHT_SCALE * PACKED_HIGH_WEIGHT).astype(np.int64)
    total = np.minimum(total, PACKED_24BIT_MAX)
    r = ((total >> 16) & 0xFF).astype(np.uint8)
    g = ((total >> 8) & 0xFF).astype(np.uint8)
    b = (total & 0xFF).astype(np.uint8)
    if r.ndim == 0:
        return int(r), int(g), int(b)
    return r, g, b


def encode_packed_pixels(normalized: np.ndarray) -> np.ndarray:
    """Encode an ``(h, w)`` normalized array into ``(h, w, 3)`` uint8 RGB."""
    r, g, b = pack_normalized_height(np.asarray(normalized))
    return np.stack([r, g, b], axis=-1)


def storage_bounds(min_height: float, max_height: float) -> tuple[np.floating, np.floating]:
    """
    Tightest storage-dtype values inside [min_height, max_height].

    A bound that is not exactly representable is rounded inward. When the
    range is narrower than one float32 step no such value exists, and the
    nearest value to ``min_height`` is used for both bounds.
    """
    dtype = np.dtype(HEIGHT_DTYPE).type
    lo = dtype(min_height)
    hi = dtype(max_height)
    if float(lo) < min_height:
        lo = np.nextafter(lo, dtype(np.inf))
    if float(hi) > max_height:
        hi = np.nextafter(hi, dtype(-np.inf))
    if lo > hi:
        lo = hi = dtype(min_height)
    return lo, hi


def to_height_array(normalized: np.ndarray, min_height: float, max_height: float) -> np.ndarray:
    """
    Rescale and flatten into the heightfield storage dtype.

    Clipping happens after the cast, so stored values never exceed the
    caller's bounds (see ``storage_bounds``).
    """
    heights = rescale(normalized, min_height, max_height).astype(HEIGHT_DTYPE)
    lo, hi = storage_bounds(min_height, max_height)
    return np.clip(heights, lo, hi).reshape(-1)
