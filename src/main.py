"""Command-line entry point for loading, sampling and exporting heightfields."""

import argparse
import logging
import sys

from pydantic import ValidationError

from domain.models import HeightfieldSettings
from domain.profiles import load_profile
from heightfield.export import save_packed_png, save_raw
from heightfield.errors import HeightfieldLoadError
from heightfield.loader import LoadResult, load_from_settings, resolve_source_format
from shared.constants import (
    DEFAULT_MAX_HEIGHT,
    DEFAULT_MIN_HEIGHT,
    LOG_FORMAT,
    RAW_BITS_8,
    RAW_BITS_16,
    SourceFormat,
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure console logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Load heightmap PNG/RAW files into elevation grids'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    source = argparse.ArgumentParser(add_help=False)
    source.add_argument('path', nargs='?', help='Heightmap file (.png or .raw)')
    source.add_argument(
        '--profile', help='Profile name or TOML file with load settings'
    )
    source.add_argument('--width', type=int, help='RAW grid width')
    source.add_argument('--height', type=int, help='RAW grid height')
    source.add_argument('--min-height', type=float, help='Height for normalized 0')
    source.add_argument('--max-height', type=float, help='Height for normalized 1')

    sub = parser.add_subparsers(dest='command', required=True)
    sub.add_parser('info', parents=[source], help='Print grid size and range')

    sample = sub.add_parser('sample', parents=[source], help='Query heights')
    sample.add_argument(
        '--at',
        nargs=2,
        type=float,
        action='append',
        metavar=('COLUMN', 'ROW'),
        required=True,
        help='Fractional grid position, may be repeated',
    )

    export = sub.add_parser('export', parents=[source], help='Re-encode a heightfield')
    export.add_argument('output', help='Destination .png or .raw file')
    export.add_argument(
        '--bits',
        type=int,
        choices=[RAW_BITS_8, RAW_BITS_16],
        default=RAW_BITS_16,
        help='Bit depth for RAW output',
    )
    return parser


def resolve_settings(args: argparse.Namespace) -> HeightfieldSettings:
    """Merge profile values with command-line overrides."""
    base: dict = {}
    if args.profile:
        base = load_profile(args.profile).model_dump()
    overrides = {
        'path': args.path,
        'width': args.width,
        'height': args.height,
        'min_height': args.min_height,
        'max_height': args.max_height,
    }
    base.update({k: v for k, v in overrides.items() if v is not None})
    base.setdefault('min_height', DEFAULT_MIN_HEIGHT)
    base.setdefault('max_height', DEFAULT_MAX_HEIGHT)
    return HeightfieldSettings.model_validate(base)


def run(args: argparse.Namespace) -> int:
    try:
        settings = resolve_settings(args)
    except (FileNotFoundError, ValidationError) as e:
        logger.error('Invalid load settings: %s', e)
        return 1

    output_format = None
    if args.command == 'export':
        # Формат выхода проверяется до загрузки источника
        try:
            output_format = resolve_source_format(args.output)
        except HeightfieldLoadError as e:
            logger.error('Invalid export target: %s', e.message)
            return 1

    result: LoadResult = load_from_settings(settings)
    if not result.ok:
        logger.error('Failed to load %s: %s', settings.path, result.error.value)
        return 1
    hf = result.heightfield

    if args.command == 'info':
        arr = hf.array
        print(
            f'{settings.path}: {hf.columns}x{hf.rows}, '
            f'min={float(arr.min()):.6g}, max={float(arr.max()):.6g}, '
            f'mean={float(arr.mean()):.6g}'
        )
    elif args.command == 'sample':
        for column, row in args.at:
            print(f'{column:g} {row:g} {hf.height(column, row):.6g}')
    elif args.command == 'export':
        if output_format is SourceFormat.RAW:
            save_raw(hf, args.output, settings.min_height, settings.max_height, args.bits)
        else:
            save_packed_png(hf, args.output, settings.min_height, settings.max_height)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    return run(args)


if __name__ == '__main__':
    sys.exit(main())
