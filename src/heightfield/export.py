"""Write heightfields back to the packed PNG and RAW formats."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image

from heightfield import formats
from shared.constants import RAW8_MAX, RAW16_MAX, RAW_BITS_8, RAW_BITS_16

if TYPE_CHECKING:
    from heightfield.grid import Heightfield

logger = logging.getLogger(__name__)


def normalize_heights(
    heightfield: Heightfield, min_height: float, max_height: float
) -> np.ndarray:
    """
    Inverse of the loader's rescale, as a top-row-first ``(rows, columns)`` array.

    A zero-width range maps every height to 0.
    """
    grid = heightfield.as_grid().astype(np.float64)
    span = max_height - min_height
    if span <= 0:
        return np.zeros_like(grid)
    return np.clip((grid - min_height) / span, 0.0, 1.0)


def save_packed_png(
    heightfield: Heightfield,
    path: str | os.PathLike[str],
    min_height: float,
    max_height: float,
) -> Path:
    """
    Save as a 24-bit packed-height RGB PNG.

    Rows are written bottom-first, so loading the file with the same height
    range gives back the grid.
    """
    out_path = Path(path)
    normalized = np.flipud(normalize_heights(heightfield, min_height, max_height))
    pixels = formats.encode_packed_pixels(normalized)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with Image.fromarray(pixels) as img:
        img.save(out_path, format='PNG')
    logger.info(
        'Saved packed PNG %s (%dx%d)', out_path, heightfield.columns, heightfield.rows
    )
    return out_path


def save_raw(
    heightfield: Heightfield,
    path: str | os.PathLike[str],
    min_height: float,
    max_height: float,
    bits: int = RAW_BITS_16,
) -> Path:
    """Save as a headerless little-endian RAW file (bottom row first)."""
    if bits == RAW_BITS_16:
        scale, dtype = RAW16_MAX, '<u2'
    elif bits == RAW_BITS_8:
        scale, dtype = RAW8_MAX, np.uint8
    else:
        msg = f'RAW export supports 8 or 16 bits, got {bits}'
        raise ValueError(msg)

    out_path = Path(path)
    normalized = np.flipud(normalize_heights(heightfield, min_height, max_height))
    samples = np.rint(normalized * scale).astype(dtype)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(samples.tobytes())
    logger.info(
        'Saved %d-bit RAW %s (%dx%d)',
        bits,
        out_path,
        heightfield.columns,
        heightfield.rows,
    )
    return out_path
