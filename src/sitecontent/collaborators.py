"""
External collaborators of the content pipeline

- render_markdown: markdown text -> HTML fragment
- measure_image: image path -> pixel width/height
- list_dir: directory listing without OS junk files

The pipeline only talks to these through BuildContext, so tests can swap
any of them out.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import markdown
from bs4 import BeautifulSoup
from PIL import Image, UnidentifiedImageError

from .errors import ImageError


# Same patterns the `junk` npm package filters
JUNK_PATTERNS = [
    r'^npm-debug\.log$',
    r'^\..*\.swp$',
    r'^\.DS_Store$',
    r'^\.AppleDouble$',
    r'^\.LSOverride$',
    r'^Icon\r$',
    r'^\._.*',
    r'^\.Spotlight-V100(?:$|/)',
    r'\.Trashes',
    r'^__MACOSX$',
    r'~$',
    r'^Thumbs\.db$',
    r'^ehthumbs\.db$',
    r'^Desktop\.ini$',
    r'@eaDir$',
]
JUNK_RE = re.compile('|'.join(f'(?:{p})' for p in JUNK_PATTERNS))

MARKDOWN_EXTENSIONS = ['fenced_code', 'tables']

_LENGTH_RE = re.compile(r'^\s*([0-9]*\.?[0-9]+)\s*(px)?\s*$')


@dataclass
class ImageSize:
    width: int
    height: int


def is_junk(name: str) -> bool:
    """True for OS/editor clutter such as .DS_Store or Thumbs.db"""
    return bool(JUNK_RE.search(name))


def list_dir(path: Path) -> List[str]:
    """List a directory, junk removed, sorted by name."""
    return sorted(name for name in os.listdir(path) if not is_junk(name))


def render_markdown(text: str) -> str:
    """Render a markdown fragment to HTML."""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def _parse_length(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    match = _LENGTH_RE.match(value)
    return float(match.group(1)) if match else None


def measure_svg(path: Path) -> ImageSize:
    """Read the intrinsic size of an SVG from width/height or its viewBox."""
    try:
        soup = BeautifulSoup(path.read_text(encoding='utf-8'), 'html.parser')
    except (OSError, UnicodeDecodeError) as e:
        raise ImageError(path, f"cannot read image: {e}") from e

    svg = soup.find('svg')
    if svg is None:
        raise ImageError(path, "not an SVG document")

    width = _parse_length(svg.get('width'))
    height = _parse_length(svg.get('height'))

    if width is None or height is None:
        # html.parser lower-cases attribute names
        view_box = svg.get('viewbox')
        parts = view_box.replace(',', ' ').split() if view_box else []
        if len(parts) != 4:
            raise ImageError(path, "SVG has no usable width/height or viewBox")
        try:
            box_width, box_height = float(parts[2]), float(parts[3])
        except ValueError:
            raise ImageError(path, f"invalid viewBox '{view_box}'")
        if box_width <= 0 or box_height <= 0:
            raise ImageError(path, f"invalid viewBox '{view_box}'")
        if width is None and height is None:
            width, height = box_width, box_height
        elif width is None:
            width = height * box_width / box_height
        else:
            height = width * box_height / box_width

    return ImageSize(width=round(width), height=round(height))


def measure_image(path: Path) -> ImageSize:
    """Return the pixel size of an image file.

    Raises ImageError if the file is missing or not an image.
    """
    path = Path(path)
    if path.suffix.lower() == '.svg':
        return measure_svg(path)
    try:
        with Image.open(path) as img:
            width, height = img.size
    except (OSError, UnidentifiedImageError) as e:
        raise ImageError(path, f"cannot measure image: {e}") from e
    return ImageSize(width=width, height=height)
