"""Image decoding and file reading collaborators used by the loader."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedImage:
    """
    Raw pixels of a decoded image.

    ``pixels`` is a uint8 array shaped (height, width, channels) with row 0
    being the first row stored in the file. Layouts other than RGB/RGBA
    carry an empty (0, 0, channels) array.
    """

    width: int
    height: int
    channels: int
    pixels: np.ndarray


class ImageDecoder(Protocol):
    def decode(self, path: str) -> DecodedImage:
        """Decode ``path``; raise OSError or ValueError on failure."""
        ...


class FileReader(Protocol):
    def read(self, path: str) -> bytes:
        """Read the whole file; raise OSError on failure."""
        ...


class PillowImageDecoder:
    """ImageDecoder backed by Pillow."""

    def decode(self, path: str) -> DecodedImage:
        try:
            return self._decode(path)
        except Image.DecompressionBombError as e:
            # Превышен лимит Image.MAX_IMAGE_PIXELS
            raise ValueError(str(e)) from e

    def _decode(self, path: str) -> DecodedImage:
        with Image.open(path) as img:
            img.load()
            if img.mode == 'P':
                # Палитра раскрывается в RGB/RGBA, как это делает libpng
                mode = 'RGBA' if 'transparency' in img.info else 'RGB'
                converted = img.convert(mode)
            else:
                converted = img
            try:
                channels = len(converted.getbands())
                width, height = converted.size
                if converted.mode in ('RGB', 'RGBA'):
                    pixels = np.asarray(converted, dtype=np.uint8)
                else:
                    # Для неподдерживаемых форматов нужен только счётчик каналов
                    pixels = np.zeros((0, 0, channels), dtype=np.uint8)
            finally:
                if converted is not img:
                    converted.close()
        logger.debug(
            'Decoded image %s: %dx%d, %d channel(s)', path, width, height, channels
        )
        return DecodedImage(
            width=width, height=height, channels=channels, pixels=pixels
        )


class FilesystemReader:
    """FileReader that reads the file in one call."""

    def read(self, path: str) -> bytes:
        data = Path(path).read_bytes()
        logger.debug('Read %d bytes from %s', len(data), path)
        return data
