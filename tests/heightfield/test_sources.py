"""Tests for heightfield.sources module."""

import numpy as np
import pytest
from PIL import Image

from heightfield.sources import FilesystemReader, PillowImageDecoder


class TestPillowImageDecoder:
    """Tests for the Pillow-backed decoder."""

    def test_rgb(self, tmp_path):
        """RGB PNG decodes to 3 channels in file row order."""
        path = tmp_path / 'rgb.png'
        pixels = np.array([[[1, 2, 3]], [[4, 5, 6]]], dtype=np.uint8)
        Image.fromarray(pixels).save(path)
        image = PillowImageDecoder().decode(str(path))
        assert (image.width, image.height, image.channels) == (1, 2, 3)
        np.testing.assert_array_equal(image.pixels, pixels)

    def test_rgba(self, tmp_path):
        """RGBA PNG decodes to 4 channels."""
        path = tmp_path / 'rgba.png'
        Image.new('RGBA', (3, 2), color=(9, 8, 7, 6)).save(path)
        image = PillowImageDecoder().decode(str(path))
        assert image.channels == 4
        assert image.pixels.shape == (2, 3, 4)
        assert tuple(image.pixels[1, 2]) == (9, 8, 7, 6)

    def test_grayscale_channel_count(self, tmp_path):
        """Single-band images report one channel."""
        path = tmp_path / 'gray.png'
        Image.new('L', (2, 2)).save(path)
        image = PillowImageDecoder().decode(str(path))
        assert image.channels == 1
        assert (image.width, image.height) == (2, 2)
        assert image.pixels.size == 0

    def test_over_pixel_limit(self, tmp_path, monkeypatch):
        """Pillow's decompression bomb limit surfaces as ValueError."""
        path = tmp_path / 'large.png'
        Image.new('RGB', (8, 8)).save(path)
        monkeypatch.setattr(Image, 'MAX_IMAGE_PIXELS', 10)
        with pytest.raises(ValueError):
            PillowImageDecoder().decode(str(path))

    def test_missing_file(self, tmp_path):
        """Missing files raise OSError."""
        with pytest.raises(OSError):
            PillowImageDecoder().decode(str(tmp_path / 'missing.png'))


class TestFilesystemReader:
    """Tests for the filesystem reader."""

    def test_reads_all_bytes(self, tmp_path):
        """Whole file content is returned."""
        path = tmp_path / 'data.raw'
        path.write_bytes(bytes(range(10)))
        assert FilesystemReader().read(str(path)) == bytes(range(10))

    def test_missing_file(self, tmp_path):
        """Missing files raise OSError."""
        with pytest.raises(OSError):
            FilesystemReader().read(str(tmp_path / 'missing.raw'))
