"""Pytest configuration and fixtures for heightfield tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from heightfield.sources import DecodedImage  # noqa: E402


class FixtureImageDecoder:
    """ImageDecoder returning a prepared image and recording calls."""

    def __init__(self, image: DecodedImage | None = None, error: Exception | None = None):
        self.image = image
        self.error = error
        self.calls: list[str] = []

    def decode(self, path: str) -> DecodedImage:
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        return self.image


class FixtureFileReader:
    """FileReader returning prepared bytes and recording calls."""

    def __init__(self, data: bytes = b'', error: Exception | None = None):
        self.data = data
        self.error = error
        self.calls: list[str] = []

    def read(self, path: str) -> bytes:
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        return self.data


def make_image(pixels) -> DecodedImage:
    """Wrap an (h, w, c) pixel list/array into a DecodedImage."""
    arr = np.asarray(pixels, dtype=np.uint8)
    h, w, c = arr.shape
    return DecodedImage(width=w, height=h, channels=c, pixels=arr)


@pytest.fixture
def image_decoder_factory():
    return FixtureImageDecoder


@pytest.fixture
def file_reader_factory():
    return FixtureFileReader


@pytest.fixture
def make_decoded_image():
    return make_image
