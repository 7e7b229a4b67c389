"""
Locating content files and reading their frontmatter

A content root holds one directory per slug. Each slug directory holds
one `index.<locale>.md` per translation, or a plain `index.md` for the
default locale.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Tuple

import frontmatter
import yaml

from .errors import FrontmatterError

logger = logging.getLogger(__name__)

Lister = Callable[[Path], List[str]]


@dataclass
class LocaleFile:
    """One translation of a post or collection"""
    slug: str
    locale: str
    path: Path


@dataclass
class ContentFile:
    """A parsed content file"""
    path: Path
    metadata: dict
    body: str
    raw: str  # full file text, frontmatter included


def is_index_file(name: str) -> bool:
    return name.startswith('index.') and name.endswith('.md')


def locale_from_filename(name: str, default_locale: str = 'en') -> str:
    """'index.es.md' -> 'es', 'index.md' -> the default locale."""
    lang = name.split('.')[-2]
    return default_locale if lang == 'index' else lang


def list_slugs(root: Path, list_dir: Lister) -> List[str]:
    """Slug directories directly below a content root, in listing order."""
    return [name for name in list_dir(root) if (root / name).is_dir()]


def find_locale_files(directory: Path, list_dir: Lister,
                      default_locale: str = 'en') -> List[LocaleFile]:
    """Find the index files of one slug directory.

    File and locale come from the same listing entry, so the i-th file
    and the i-th locale always describe the same document.
    """
    slug = directory.name
    found = [
        LocaleFile(slug=slug,
                   locale=locale_from_filename(name, default_locale),
                   path=directory / name)
        for name in list_dir(directory)
        if is_index_file(name)
    ]
    logger.debug("%s: %d index file(s)", slug, len(found))
    return found


def read_content_file(path: Path) -> ContentFile:
    """Read a markdown file and split off its frontmatter."""
    try:
        raw = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise FrontmatterError(path, f"cannot read file: {e}") from e

    try:
        post = frontmatter.loads(raw)
    except (yaml.YAMLError, ValueError) as e:
        raise FrontmatterError(path, f"invalid frontmatter: {e}") from e

    metadata = post.metadata or {}
    if not isinstance(metadata, dict):
        raise FrontmatterError(path, "frontmatter is not a mapping")

    return ContentFile(path=path, metadata=dict(metadata), body=post.content, raw=raw)


def require_list(content: ContentFile, key: str, allow_empty: bool = True) -> List:
    """Fetch a mandatory list field from frontmatter."""
    value = content.metadata.get(key)
    if value is None:
        raise FrontmatterError(content.path, f"missing '{key}'")
    value = check_string_list(content, key, value)
    if not value and not allow_empty:
        raise FrontmatterError(content.path, f"'{key}' must not be empty")
    return value


def optional_list(content: ContentFile, key: str) -> List[str]:
    value = content.metadata.get(key)
    if value is None:
        return []
    return check_string_list(content, key, value)


def check_string_list(content: ContentFile, key: str, value) -> List[str]:
    """A single string becomes a one-item list; anything else must be a list of strings."""
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise FrontmatterError(content.path, f"'{key}' must be a list")
    for item in value:
        if not isinstance(item, str):
            raise FrontmatterError(content.path, f"'{key}' entries must be strings, got {item!r}")
    return list(value)


def count_words(text: str) -> int:
    """Approximate word count: the number of pieces between whitespace runs.

    Frontmatter is counted too, and so are the empty pieces produced by
    leading or trailing whitespace. This is deliberately rough; "what is a
    word" has no good answer for text like `@angular/forms`.
    """
    return len(re.split(r'\s+', text))


def split_scan(files: List[LocaleFile]) -> Tuple[List[Path], List[str]]:
    """Paths and locales of a scan as two parallel lists."""
    return [f.path for f in files], [f.locale for f in files]
