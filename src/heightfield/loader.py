"""
Heightfield loading from PNG images and headerless RAW files.

The file extension selects the source format. Every failure is logged and
reported through a LoadResult; no exception escapes ``HeightfieldLoader.load``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from heightfield import formats
from heightfield.errors import HeightfieldLoadError, LoadErrorKind
from heightfield.grid import Heightfield
from heightfield.sources import FilesystemReader, PillowImageDecoder
from shared.constants import (
    DEFAULT_MAX_HEIGHT,
    DEFAULT_MIN_HEIGHT,
    EXTENSION_LENGTH,
    EXTENSION_TO_FORMAT,
    MEMORY_LOG_THRESHOLD_MB,
    PIXEL_CHANNELS_RGB,
    PIXEL_CHANNELS_RGBA,
    RAW_BITS_8,
    RAW_BITS_16,
    RAW_MIN_DIMENSION,
    SourceFormat,
)
from shared.diagnostics import estimate_heightfield_memory_mb, log_memory_usage

if TYPE_CHECKING:
    from collections.abc import Callable

    from domain.models import HeightfieldSettings
    from heightfield.sources import FileReader, ImageDecoder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a load: either a heightfield or an error kind."""

    heightfield: Heightfield | None = None
    error: LoadErrorKind | None = None
    message: str = ''

    @property
    def ok(self) -> bool:
        return self.heightfield is not None


def resolve_source_format(path: str) -> SourceFormat:
    """Pick the source format from the last four characters of ``path``."""
    if len(path) <= EXTENSION_LENGTH:
        msg = f'Unrecognized file extension for heightfield image: {path}.'
        raise HeightfieldLoadError(LoadErrorKind.INVALID_PATH, msg)
    source_format = EXTENSION_TO_FORMAT.get(path[-EXTENSION_LENGTH:].lower())
    if source_format is None:
        msg = f'Unsupported heightfield image format: {path}.'
        raise HeightfieldLoadError(LoadErrorKind.UNSUPPORTED_FORMAT, msg)
    return source_format


class HeightfieldLoader:
    """
    Builds Heightfields from files through pluggable collaborators.

    Usage:
        loader = HeightfieldLoader()
        result = loader.load('terrain.raw', 257, 257, 0.0, 120.0)
        if result.ok:
            h = result.heightfield.height(10.5, 3.25)
    """

    def __init__(
        self,
        image_decoder: ImageDecoder | None = None,
        file_reader: FileReader | None = None,
    ) -> None:
        self.image_decoder = image_decoder or PillowImageDecoder()
        self.file_reader = file_reader or FilesystemReader()

    def load(
        self,
        path: str | os.PathLike[str],
        width: int = 0,
        height: int = 0,
        min_height: float = DEFAULT_MIN_HEIGHT,
        max_height: float = DEFAULT_MAX_HEIGHT,
    ) -> LoadResult:
        """
        Load a heightfield, rescaling elevations into [min_height, max_height].

        Args:
            path: File ending in '.png' or '.raw' (case-insensitive).
            width: Columns of a RAW file; ignored for images.
            height: Rows of a RAW file; ignored for images.
            min_height: Elevation for a normalized value of 0.
            max_height: Elevation for a normalized value of 1.

        Returns:
            LoadResult with the heightfield, or with the failure kind.

        """
        path = os.fspath(path)
        try:
            heightfield = self._load(path, width, height, min_height, max_height)
        except HeightfieldLoadError as e:
            logger.warning('%s', e.message)
            return LoadResult(error=e.kind, message=e.message)

        logger.info(
            'Loaded heightfield %s: %dx%d, heights [%s, %s]',
            path,
            heightfield.columns,
            heightfield.rows,
            min_height,
            max_height,
        )
        return LoadResult(heightfield=heightfield)

    def _load(
        self,
        path: str,
        width: int,
        height: int,
        min_height: float,
        max_height: float,
    ) -> Heightfield:
        if max_height < min_height:
            msg = (
                f"Invalid height range for heightfield image: {path} "
                f"(max_height {max_height} < min_height {min_height})."
            )
            raise HeightfieldLoadError(LoadErrorKind.INVALID_HEIGHT_RANGE, msg)

        handlers: dict[SourceFormat, Callable[..., Heightfield]] = {
            SourceFormat.PNG: self._load_image,
            SourceFormat.RAW: self._load_raw,
        }
        source_format = resolve_source_format(path)
        return handlers[source_format](path, width, height, min_height, max_height)

    def _load_image(
        self,
        path: str,
        width: int,
        height: int,
        min_height: float,
        max_height: float,
    ) -> Heightfield:
        try:
            image = self.image_decoder.decode(path)
        except (OSError, ValueError) as e:
            msg = f'Failed to decode heightfield image: {path} ({e}).'
            raise HeightfieldLoadError(LoadErrorKind.DECODE_FAILURE, msg) from e

        if image.channels not in (PIXEL_CHANNELS_RGB, PIXEL_CHANNELS_RGBA):
            msg = (
                f'Unsupported pixel format for heightfield image: {path} '
                f'({image.channels} channel(s)).'
            )
            raise HeightfieldLoadError(LoadErrorKind.UNSUPPORTED_PIXEL_LAYOUT, msg)

        self._log_allocation(image.width, image.height)
        # Изображение хранит строки снизу вверх относительно сетки высот
        normalized = formats.to_top_left_origin(
            formats.decode_packed_pixels(image.pixels)
        )
        heights = formats.to_height_array(normalized, min_height, max_height)
        return Heightfield(image.width, image.height, heights)

    def _load_raw(
        self,
        path: str,
        width: int,
        height: int,
        min_height: float,
        max_height: float,
    ) -> Heightfield:
        if (
            width < RAW_MIN_DIMENSION
            or height < RAW_MIN_DIMENSION
            or max_height < 0
        ):
            msg = (
                "Invalid 'width', 'height' or 'maxHeight' parameter for RAW "
                f'heightfield image: {path}.'
            )
            raise HeightfieldLoadError(LoadErrorKind.INVALID_RAW_PARAMETERS, msg)

        try:
            data = self.file_reader.read(path)
        except OSError as e:
            msg = f'Failed to read bytes from RAW heightfield image: {path} ({e}).'
            raise HeightfieldLoadError(LoadErrorKind.READ_FAILURE, msg) from e

        bits = formats.infer_raw_bit_depth(len(data), width, height)
        if bits not in (RAW_BITS_8, RAW_BITS_16):
            msg = (
                'Invalid RAW file - must be 8-bit or 16-bit, but found neither: '
                f'{path} (ambiguous bit depth {bits}).'
            )
            raise HeightfieldLoadError(LoadErrorKind.AMBIGUOUS_BIT_DEPTH, msg)

        logger.debug('RAW heightfield %s: %d-bit, %dx%d', path, bits, width, height)
        self._log_allocation(width, height)
        # RAW хранит строки снизу вверх, а сетка высот хранит их сверху вниз
        normalized = formats.to_top_left_origin(
            formats.decode_raw_samples(data, width, height, bits)
        )
        heights = formats.to_height_array(normalized, min_height, max_height)
        return Heightfield(width, height, heights)

    @staticmethod
    def _log_allocation(columns: int, rows: int) -> None:
        size_mb = estimate_heightfield_memory_mb(columns, rows)
        logger.debug('Allocating %dx%d heightfield (~%.1f MB)', columns, rows, size_mb)
        if size_mb >= MEMORY_LOG_THRESHOLD_MB:
            log_memory_usage(f'before {columns}x{rows} heightfield')


_default_loader = HeightfieldLoader()


def create(
    path: str | os.PathLike[str],
    width: int = 0,
    height: int = 0,
    min_height: float = DEFAULT_MIN_HEIGHT,
    max_height: float = DEFAULT_MAX_HEIGHT,
) -> Heightfield | None:
    """Load a heightfield of either format; None on failure."""
    return _default_loader.load(path, width, height, min_height, max_height).heightfield


def create_from_image(
    path: str | os.PathLike[str],
    min_height: float = DEFAULT_MIN_HEIGHT,
    max_height: float = DEFAULT_MAX_HEIGHT,
) -> Heightfield | None:
    """Load a packed-height PNG; dimensions come from the image."""
    return create(path, 0, 0, min_height, max_height)


def create_from_raw(
    path: str | os.PathLike[str],
    width: int,
    height: int,
    min_height: float = DEFAULT_MIN_HEIGHT,
    max_height: float = DEFAULT_MAX_HEIGHT,
) -> Heightfield | None:
    """Load a headerless 8/16-bit RAW file of the given dimensions."""
    return create(path, width, height, min_height, max_height)


def load_from_settings(
    settings: HeightfieldSettings,
    loader: HeightfieldLoader | None = None,
) -> LoadResult:
    """Load using parameters from a validated settings model."""
    return (loader or _default_loader).load(
        settings.path,
        settings.width,
        settings.height,
        settings.min_height,
        settings.max_height,
    )
