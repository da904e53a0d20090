"""CLI entry point for winbmp.

Usage:
    winbmp info <file>                   Print header summary as JSON
    winbmp convert <file> -o <out>       Decode and save via Pillow (PNG by default)
    winbmp batch-convert <dir> -o <dir>  Convert every .bmp in a directory
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from . import __version__
from .decoder import Decoder, decode
from .errors import DecodeError


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Windows Bitmap decoder."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(name)s %(levelname)s: %(message)s",
    )


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def info(file: str) -> None:
    """Print the BMP header of FILE as JSON."""
    with open(file, "rb") as f:
        dec = Decoder(f)
        try:
            config = dec.decode_config()
        except DecodeError as e:
            raise click.ClickException(f"{file}: {e}") from e

    out = dec.header.summary()
    out["color_model"] = "palette" if config.color_model.indexed else "rgba"
    click.echo(json.dumps(out, indent=2))


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: <file>.png)",
)
@click.option("--format", "fmt", default=None, help="Pillow format name (default: from extension)")
@click.option("--alpha/--no-alpha", default=True, help="Keep the alpha channel of direct-color images")
def convert(file: str, output: str | None, fmt: str | None, alpha: bool) -> None:
    """Decode FILE and save it with Pillow."""
    out_path = Path(output) if output else Path(file).with_suffix(".png")
    try:
        _convert_one(Path(file), out_path, fmt=fmt, alpha=alpha)
    except (DecodeError, OSError) as e:
        raise click.ClickException(f"{file}: {e}") from e
    click.echo(f"Wrote {out_path}")


@main.command("batch-convert")
@click.argument("src", metavar="DIR", type=click.Path(exists=True, file_okay=False))
@click.option("-o", "--output", type=click.Path(file_okay=False), default=None)
@click.option("--alpha/--no-alpha", default=True)
def batch_convert(src: str, output: str | None, alpha: bool) -> None:
    """Convert every .bmp file in DIR to PNG."""
    src_dir = Path(src)
    out_dir = Path(output) if output else src_dir / "_png"
    out_dir.mkdir(parents=True, exist_ok=True)

    files = sorted(p for p in src_dir.iterdir() if p.is_file() and p.suffix.lower() == ".bmp")
    click.echo(f"Found {len(files)} BMP files")

    failed = 0
    for f in files:
        try:
            _convert_one(f, out_dir / f"{f.stem}.png", alpha=alpha)
            click.echo(f"  {f.name} -> {f.stem}.png")
        except (DecodeError, OSError) as e:
            failed += 1
            click.echo(f"  FAILED {f.name}: {e}", err=True)

    click.echo(f"Done. {len(files) - failed} converted, {failed} failed. Output in {out_dir}")


def _convert_one(src: Path, dst: Path, fmt: str | None = None, alpha: bool = True) -> None:
    with open(src, "rb") as f:
        image = decode(f)
    image.to_pil(alpha=alpha).save(dst, format=fmt)


if __name__ == "__main__":
    main()
