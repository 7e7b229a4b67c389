"""
Collection aggregation

Collections come from two places: one directory per slug below the
collections root, and the optional collection-mapping.yaml for
collections that live outside the content tree. Both produce
CollectionShells, sorted newest first. Posts are attached later by the
linker.
"""

import logging
from pathlib import Path
from typing import List

import yaml

from .authors import resolve_authors, server_path
from .context import BuildContext
from .discovery import find_locale_files, list_slugs, read_content_file, split_scan
from .errors import ContentError, FrontmatterError
from .ordering import format_date, sort_by_published
from .schema import CollectionShell, ImageMeta, split_known

logger = logging.getLogger(__name__)

COLLECTIONS_SERVER_PREFIX = '/content/collections'


def build_cover_img_meta(cover_img: str, base_dir: Path, served_at: str,
                         ctx: BuildContext) -> ImageMeta:
    absolute = base_dir / cover_img.lstrip('/')
    size = ctx.measure(absolute)
    return ImageMeta(
        width=size.width,
        height=size.height,
        relative_path=cover_img,
        relative_server_path=served_at,
        absolute_fs_path=str(absolute),
    )


def make_shell(slug: str, locale: str, locales: List[str], metadata: dict,
               source, ctx: BuildContext) -> CollectionShell:
    """Build a CollectionShell from frontmatter-shaped data (cover image not yet measured)."""
    values, extra = split_known(metadata, CollectionShell.KEYS)

    authors = values.get('authors')
    if isinstance(authors, str):
        authors = [authors]
    if not authors:
        raise FrontmatterError(source, "collection needs at least one author")
    values['authors'] = list(authors)

    if not values.get('cover_img'):
        raise FrontmatterError(source, "missing 'coverImg'")
    values.setdefault('title', slug)
    if values.get('tags') is None:
        values['tags'] = []

    shell = CollectionShell(slug=slug, locale=locale, locales=list(locales),
                            extra=extra, **values)
    shell.authors_meta = resolve_authors(ctx.authors, shell.authors, owner=slug)
    shell.published_meta = format_date(shell.published)
    return shell


def load_directory_collections(ctx: BuildContext) -> List[CollectionShell]:
    """One shell per index file of every collection directory."""
    root = ctx.config.collections_dir
    if not root.is_dir():
        logger.debug("no collections directory at %s", root)
        return []

    collections = []
    for slug in list_slugs(root, ctx.list_dir):
        collection_dir = root / slug
        files = find_locale_files(collection_dir, ctx.list_dir, ctx.config.default_locale)
        paths, locales = split_scan(files)

        for path, locale in zip(paths, locales):
            content = read_content_file(path)
            shell = make_shell(slug, locale, locales, content.metadata, path, ctx)
            shell.cover_img_meta = build_cover_img_meta(
                shell.cover_img,
                collection_dir,
                server_path(COLLECTIONS_SERVER_PREFIX, slug, shell.cover_img),
                ctx,
            )
            collections.append(shell)

    return collections


def load_collection_mapping(path: Path) -> List[dict]:
    """Read collection-mapping.yaml; a missing file means no mapped collections."""
    if not path.exists():
        return []
    try:
        with open(path, encoding='utf-8') as f:
            entries = yaml.safe_load(f) or []
    except (OSError, yaml.YAMLError) as e:
        raise ContentError(f"{path}: cannot load collection mapping: {e}") from e
    if not isinstance(entries, list):
        raise ContentError(f"{path}: expected a list of collections")
    return entries


def load_mapped_collections(ctx: BuildContext) -> List[CollectionShell]:
    """Shells for collections declared in the mapping file.

    Their cover images live below the public directory and they are only
    available in English.
    """
    mapping_path = ctx.config.collection_mapping_path
    collections = []
    for entry in load_collection_mapping(mapping_path):
        entry = dict(entry)
        slug = entry.pop('slug', None)
        if not slug:
            raise FrontmatterError(mapping_path, f"mapped collection without a slug: {entry}")

        shell = make_shell(slug, 'en', ['en'], entry, mapping_path, ctx)
        shell.cover_img_meta = build_cover_img_meta(
            shell.cover_img,
            ctx.config.public_dir,
            shell.cover_img,
            ctx,
        )
        collections.append(shell)
    return collections


def build_collections(ctx: BuildContext) -> List[CollectionShell]:
    """All collections, newest first, without their posts."""
    collections = load_directory_collections(ctx) + load_mapped_collections(ctx)
    logger.debug("loaded %d collection record(s)", len(collections))
    return sort_by_published(collections)
