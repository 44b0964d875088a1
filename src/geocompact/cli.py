"""
GeoCompact CLI - Compress and validate GeoJSON files.

Usage:
    geocompact compress input.geojson -o output.geojson --precision 5
    geocompact validate input.geojson
    geocompact serve --port 8000
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml

from .compressor import compress, validate
from .measure import format_bytes
from .options import CompressionOptions

# Configure logging for CLI
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("geocompact")


def load_config(config_path: Optional[Path]) -> Dict[str, Any]:
    """Load compression options from a YAML file."""
    if config_path is None:
        return {}

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise click.BadParameter(
            f"{config_path} is not valid YAML: {e}", param_hint="--config"
        )

    if not isinstance(config, dict):
        raise click.BadParameter(
            f"{config_path} must contain a mapping of options", param_hint="--config"
        )
    logger.debug(f"Loaded config from {config_path}")
    return config


@click.group()
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Enable verbose output (debug logging).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Only show warnings and errors.",
)
def cli(verbose: bool, quiet: bool):
    """GeoCompact - make GeoJSON files smaller."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.getLogger("geocompact").setLevel(level)


@cli.command("compress")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file (default: stdout).",
)
@click.option("--precision", "-p", type=click.IntRange(1, 10), default=None,
              help="Decimal places kept per coordinate (default: 6).")
@click.option("--simplify/--no-simplify", default=None,
              help="Simplify lines with Douglas-Peucker (default: on).")
@click.option("--epsilon", "-e", type=float, default=None,
              help="Simplification tolerance in coordinate units (default: 0.0001).")
@click.option("--sanitize/--no-sanitize", default=None,
              help="Drop null and blank property values (default: on).")
@click.option("--shallow", is_flag=True, default=False,
              help="Only clean top-level properties.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with compression options.",
)
def compress_command(
    input_path: Path,
    output_path: Optional[Path],
    precision: Optional[int],
    simplify: Optional[bool],
    epsilon: Optional[float],
    sanitize: Optional[bool],
    shallow: bool,
    config_path: Optional[Path],
):
    """Compress a GeoJSON file."""
    values = load_config(config_path)

    # Command-line flags override the config file
    overrides = {
        "precision": precision,
        "simplify": simplify,
        "simplify_epsilon": epsilon,
        "sanitize_properties": sanitize,
        "sanitize_mode": "shallow" if shallow else None,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        options = CompressionOptions.from_dict(values)
    except ValueError as e:
        raise click.BadParameter(str(e))

    result = compress(input_path.read_bytes(), options)

    if not result.ok:
        logger.error(f"{input_path}: {result.error}")
        sys.exit(1)

    if output_path is None:
        click.echo(result.compressed)
    else:
        output_path.write_text(result.compressed, encoding="utf-8")
        logger.info(f"Saved output file: {output_path}")

    logger.info(
        f"{format_bytes(result.original_size)} -> {format_bytes(result.compressed_size)} "
        f"({result.compression_ratio}% of original, saved {format_bytes(result.savings)})"
    )


@cli.command("validate")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate_command(input_path: Path):
    """Check that a file is GeoJSON the compressor accepts."""
    result = validate(input_path.read_bytes())

    if result.valid:
        click.echo(f"{input_path}: valid")
    else:
        click.echo(f"{input_path}: invalid - {result.error}")
        sys.exit(1)


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default: 0.0.0.0).")
@click.option("--port", type=int, default=None, help="Port (default: 8000).")
def serve_command(host: Optional[str], port: Optional[int]):
    """Run the web application."""
    from .app import main
    main(host=host, port=port)


def main():
    cli()


if __name__ == "__main__":
    main()
