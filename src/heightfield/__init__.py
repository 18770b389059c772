"""Heightfield module - elevation grids from heightmap files and bilinear sampling."""

from heightfield.errors import HeightfieldLoadError, LoadErrorKind
from heightfield.grid import Heightfield
from heightfield.loader import (
    HeightfieldLoader,
    LoadResult,
    create,
    create_from_image,
    create_from_raw,
    load_from_settings,
    resolve_source_format,
)
from heightfield.sampler import sample_height, sample_heights
from heightfield.sources import (
    DecodedImage,
    FilesystemReader,
    PillowImageDecoder,
)

__all__ = [
    'DecodedImage',
    'FilesystemReader',
    'Heightfield',
    'HeightfieldLoadError',
    'HeightfieldLoader',
    'LoadErrorKind',
    'LoadResult',
    'PillowImageDecoder',
    'create',
    'create_from_image',
    'create_from_raw',
    'load_from_settings',
    'resolve_source_format',
    'sample_height',
    'sample_heights',
]
