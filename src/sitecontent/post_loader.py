"""
Post aggregation

Every post directory yields one PostRecord per translation. Records are
cross-referenced against authors, licenses, tags and the already built
collections, sorted newest first, and then given banner images based on
where they land on their locale's listing pages.
"""

import logging
from typing import List, Optional, Tuple

from .authors import resolve_authors
from .context import BuildContext
from .discovery import (
    ContentFile,
    count_words,
    find_locale_files,
    list_slugs,
    optional_list,
    read_content_file,
    require_list,
    split_scan,
)
from .errors import FrontmatterError
from .ordering import assign_banners, format_date, sort_by_published
from .schema import CollectionShell, PostRecord, split_known

logger = logging.getLogger(__name__)

SOCIAL_IMG_PATH = '/generated/{slug}.twitter-preview.jpg'


def social_img_path(slug: str) -> str:
    """Where the preview image generator writes the card for a post."""
    return SOCIAL_IMG_PATH.format(slug=slug)


def validate_tags(slug: str, tags: List[str], ctx: BuildContext) -> Tuple[List[str], List[str]]:
    """Split tags into (known, dropped); dropped tags are logged, not fatal."""
    reference = ctx.require_reference()
    known = []
    dropped = []
    for tag in tags:
        if reference.has_tag(tag):
            known.append(tag)
        else:
            logger.warning("%s: Tag '%s' is not specified in tags.json! Filtering...", slug, tag)
            dropped.append(tag)
    return known, dropped


def find_collection(collections: List[CollectionShell],
                    slug: Optional[str]) -> Optional[CollectionShell]:
    if not slug:
        return None
    for collection in collections:
        if collection.slug == slug:
            return collection
    return None


def build_post(slug: str, locale: str, locales: List[str], content: ContentFile,
               collections: List[CollectionShell], ctx: BuildContext) -> PostRecord:
    reference = ctx.require_reference()
    values, extra = split_known(content.metadata, PostRecord.KEYS)

    values['authors'] = require_list(content, 'authors')
    values['tags'], dropped = validate_tags(slug, optional_list(content, 'tags'), ctx)
    values['attached'] = optional_list(content, 'attached')
    values.setdefault('title', slug)
    noindex = values.get('noindex')
    if noindex is None:
        noindex = False
    if not isinstance(noindex, bool):
        raise FrontmatterError(content.path, f"'noindex' must be true or false, got {noindex!r}")
    values['noindex'] = noindex

    post = PostRecord(slug=slug, locale=locale, locales=list(locales), extra=extra, **values)
    post.dropped_tags = dropped
    post.authors_meta = resolve_authors(ctx.authors, post.authors, owner=slug)
    post.license_meta = reference.find_license(post.license)
    post.collection_meta = find_collection(collections, post.collection)
    if post.collection and post.collection_meta is None:
        logger.debug("%s: unknown collection '%s'", slug, post.collection)
    post.published_meta = format_date(post.published)
    post.edited_meta = format_date(post.edited)
    post.word_count = count_words(content.raw)
    post.social_img = social_img_path(slug)
    return post


def load_posts(collections: List[CollectionShell], ctx: BuildContext) -> List[PostRecord]:
    """Unsorted posts in directory listing order."""
    root = ctx.config.posts_dir
    if not root.is_dir():
        logger.debug("no posts directory at %s", root)
        return []

    posts = []
    for slug in list_slugs(root, ctx.list_dir):
        files = find_locale_files(root / slug, ctx.list_dir, ctx.config.default_locale)
        paths, locales = split_scan(files)
        for path, locale in zip(paths, locales):
            content = read_content_file(path)
            posts.append(build_post(slug, locale, locales, content, collections, ctx))
    return posts


def build_posts(collections: List[CollectionShell], ctx: BuildContext) -> List[PostRecord]:
    """All posts, newest first, with banner images assigned.

    `collections` must be the complete collection list; posts only keep a
    reference to the collection they belong to.
    """
    posts = sort_by_published(load_posts(collections, ctx))
    counts = assign_banners(posts, ctx.config.page_size, ctx.config.banner_positions)
    logger.debug("posts per locale: %s", counts)
    return posts
