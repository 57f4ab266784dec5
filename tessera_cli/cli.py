"""
Tessera CLI - Main entry point.

Provides command-line access to puzzle files: blueprint export, layout
validation and catalog listing.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from tessera_board import BlueprintRasterizer, Puzzle, ShapeCatalog, validate_layout
from tessera_board.catalog import dimension_label
from tessera_control import SessionConfig
from tessera_io import default_catalog, export_blueprint, load_catalog_file, load_puzzle

OUTPUT_FORMATS = {".png", ".svg"}


def read_puzzle_file(puzzle_path: str) -> dict:
    """
    Load a puzzle file as a JSON object.

    Raises:
        FileNotFoundError: If the puzzle file doesn't exist
        ValueError: If the JSON is invalid
    """
    path = Path(puzzle_path)

    if not path.exists():
        raise FileNotFoundError(f"Puzzle file not found: {puzzle_path}")

    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {puzzle_path}: {e}")


def resolve_catalog(puzzle_path: Optional[str], data: Optional[dict], shapes: Optional[str]) -> ShapeCatalog:
    """
    Catalog for a puzzle.

    Precedence: --shapes, then the puzzle's shapes_file (relative to the
    puzzle file), then the bundled catalog.
    """
    if shapes:
        return load_catalog_file(shapes)
    if data and data.get("shapes_file") and puzzle_path:
        return load_catalog_file(Path(puzzle_path).parent / data["shapes_file"])
    return default_catalog()


def open_puzzle(puzzle_path: str, shapes: Optional[str]) -> Puzzle:
    data = read_puzzle_file(puzzle_path)
    return load_puzzle(data, resolve_catalog(puzzle_path, data, shapes))


def write_blueprint(puzzle: Puzzle, output: str, px_per_mm: float, language: str) -> Path:
    """
    Export a blueprint as PNG or SVG (chosen by file extension).

    Returns:
        Path written
    """
    path = Path(output)
    suffix = path.suffix.lower()
    if suffix not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported output format '{suffix}'. Use one of {sorted(OUTPUT_FORMATS)}")

    description = export_blueprint(puzzle, px_per_mm=px_per_mm, language=language)
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".svg":
        path.write_text(description.to_svg(title=puzzle.note(language)), encoding="utf-8")
    else:
        path.write_bytes(BlueprintRasterizer().encode_png(description))
    return path


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Tessera CLI - Shape-board puzzle tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export a blueprint (format from extension)
  tessera blueprint puzzles/level1.json out/level1.png
  tessera blueprint puzzles/level1.json out/level1.svg --px-per-mm 8 --lang zh

  # Check a layout for overlaps and pieces outside the board
  tessera validate puzzles/level1.json

  # List shapes in a catalog
  tessera catalog
  tessera catalog --shapes shapes/custom.json
"""
    )

    # Global arguments
    parser.add_argument(
        "--config",
        default=None,
        help="Session config YAML (blueprint defaults)"
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # blueprint command
    blueprint = subparsers.add_parser('blueprint', help='Export a puzzle blueprint (PNG or SVG)')
    blueprint.add_argument('puzzle', help='Path to puzzle JSON')
    blueprint.add_argument('output', help='Output file (.png or .svg)')
    blueprint.add_argument('--px-per-mm', type=float, default=None, help='Pixels per millimetre (default: 4)')
    blueprint.add_argument('--lang', choices=['en', 'zh'], default=None, help='Label language (default: en)')
    blueprint.add_argument('--shapes', default=None, help='Shape catalog JSON')

    # validate command
    validate = subparsers.add_parser('validate', help='Report overlaps and pieces outside the board')
    validate.add_argument('puzzle', help='Path to puzzle JSON')
    validate.add_argument('--shapes', default=None, help='Shape catalog JSON')

    # catalog command
    catalog = subparsers.add_parser('catalog', help='List catalog shapes')
    catalog.add_argument('--shapes', default=None, help='Shape catalog JSON')

    # Parse arguments
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute command
    try:
        config = SessionConfig.from_yaml(args.config) if args.config else SessionConfig()

        if args.command == 'blueprint':
            puzzle = open_puzzle(args.puzzle, args.shapes)
            px_per_mm = args.px_per_mm if args.px_per_mm is not None else config.blueprint.px_per_mm
            language = args.lang or config.blueprint.language
            path = write_blueprint(puzzle, args.output, px_per_mm, language)
            print(f"Blueprint written to {path}")

        elif args.command == 'validate':
            puzzle = open_puzzle(args.puzzle, args.shapes)
            report = validate_layout(puzzle)
            if report.ok:
                print(f"OK: {len(puzzle)} pieces, no issues")
            else:
                for message in report.messages:
                    print(message)
                sys.exit(2)

        elif args.command == 'catalog':
            shapes = resolve_catalog(None, None, args.shapes)
            for shape in shapes:
                label = shape.catalog_label(config.blueprint.language)
                dims = dimension_label(shape)
                print(f"{shape.id:<24} {dims}" + (f"  [{label}]" if label and label != dims else ""))

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
