"""Failure kinds reported by the heightfield loader."""

from __future__ import annotations

from enum import Enum


class LoadErrorKind(str, Enum):
    """Why a heightfield could not be produced."""

    INVALID_PATH = 'invalid_path'
    UNSUPPORTED_FORMAT = 'unsupported_format'
    UNSUPPORTED_PIXEL_LAYOUT = 'unsupported_pixel_layout'
    INVALID_RAW_PARAMETERS = 'invalid_raw_parameters'
    INVALID_HEIGHT_RANGE = 'invalid_height_range'
    READ_FAILURE = 'read_failure'
    DECODE_FAILURE = 'decode_failure'
    AMBIGUOUS_BIT_DEPTH = 'ambiguous_bit_depth'


class HeightfieldLoadError(Exception):
    """Raised inside the loader pipeline; converted to a LoadResult at the boundary."""

    def __init__(self, kind: LoadErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
