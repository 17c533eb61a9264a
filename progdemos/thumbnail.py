"""Produce thumbnail-size images from larger images."""

from __future__ import annotations

import os
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import IO

from PIL import Image

_SIZE = 128


def thumbnail_image(src: Image.Image) -> Image.Image:
    """Return a thumbnail-size RGBA version of ``src``, keeping its aspect ratio."""
    xs, ys = src.size
    width, height = _SIZE, _SIZE
    aspect = xs / ys
    if aspect < 1.0:
        width = int(_SIZE * aspect)  # portrait
    else:
        height = int(_SIZE / aspect)  # landscape
    xscale = xs / width
    yscale = ys / height

    pixels = src.convert("RGBA").load()
    dst = Image.new("RGBA", (width, height))
    # a very crude scaling algorithm
    dst.putdata(
        [
            pixels[int(x * xscale), int(y * yscale)]
            for y in range(height)
            for x in range(width)
        ]
    )
    return dst


def image_stream(out: IO[bytes], inp: IO[bytes]) -> None:
    """Read an image from ``inp`` and write a JPEG thumbnail of it to ``out``."""
    with Image.open(inp) as src:
        src.load()
        dst = thumbnail_image(src)
    dst.convert("RGB").save(out, format="JPEG")


def image_file_to(outfile: str, infile: str) -> None:
    """Read an image from ``infile`` and write its thumbnail to ``outfile``."""
    with open(infile, "rb") as inp, open(outfile, "wb") as out:
        try:
            image_stream(out, inp)
        except (OSError, ValueError) as err:
            raise OSError(f"scaling {infile} to {outfile}: {err}") from err


def _ext(path: str) -> str:
    tail = path.replace(os.sep, "/").rsplit("/", 1)[-1]
    dot = tail.rfind(".")
    return tail[dot:] if dot >= 0 else ""


def image_file(infile: str) -> str:
    """Write a thumbnail of ``infile`` next to it and return its name.

    ``foo.jpeg`` gives ``foo.thumb.jpeg``.
    """
    ext = _ext(infile)
    outfile = infile[: len(infile) - len(ext)] + ".thumb" + ext
    image_file_to(outfile, infile)
    return outfile


def make_thumbnails(filenames: list[str]) -> list[str]:
    """Make thumbnails of the files in parallel and return their names.

    Raises the first error met.
    """
    with ThreadPoolExecutor() as pool:
        return list(pool.map(image_file, filenames))


def main(argv: list[str] | None = None) -> int:
    """Make a thumbnail of each file named on a line of standard input."""
    for line in sys.stdin:
        name = line.rstrip("\r\n")
        try:
            thumb = image_file(name)
        except OSError as err:
            print(err, file=sys.stderr)
            continue
        print(thumb)
    return 0