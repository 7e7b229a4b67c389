"""
The content build

Stages run strictly in order, each one finishing before the next starts:

1. reference data (about, unicorns, roles, licenses, tags)
2. author enrichment
3. collections, without their posts
4. posts, which reference the finished collections
5. linking posts back into their collections

Any ContentError aborts the build; nothing partial is returned.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .authors import enrich_authors
from .collection_loader import build_collections
from .config import SiteConfig
from .context import BuildContext
from .linker import link_collections
from .post_loader import build_posts
from .reference import load_reference_data
from .schema import AuthorRecord, CollectionRecord, PostRecord, TagRecord

logger = logging.getLogger(__name__)


@dataclass
class SiteContent:
    """Everything the rendering layer consumes"""
    about: dict = field(default_factory=dict)
    unicorns: List[AuthorRecord] = field(default_factory=list)
    roles: List[dict] = field(default_factory=list)
    licenses: List[dict] = field(default_factory=list)
    collections: List[CollectionRecord] = field(default_factory=list)
    posts: List[PostRecord] = field(default_factory=list)
    tags: Dict[str, TagRecord] = field(default_factory=dict)

    def posts_for_locale(self, locale: str) -> List[PostRecord]:
        return [post for post in self.posts if post.locale == locale]

    def find_post(self, slug: str, locale: str = 'en') -> Optional[PostRecord]:
        return next((p for p in self.posts if p.slug == slug and p.locale == locale), None)

    def find_collection(self, slug: str, locale: str = 'en') -> Optional[CollectionRecord]:
        return next((c for c in self.collections if c.slug == slug and c.locale == locale), None)

    def locale_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for post in self.posts:
            counts[post.locale] = counts.get(post.locale, 0) + 1
        return counts

    def to_dict(self) -> dict:
        return {
            'about': self.about,
            'unicorns': [author.to_dict() for author in self.unicorns],
            'roles': self.roles,
            'licenses': self.licenses,
            'collections': [collection.to_dict() for collection in self.collections],
            'posts': [post.to_dict() for post in self.posts],
            'tags': {tag_id: tag.to_dict() for tag_id, tag in self.tags.items()},
        }


def build_site_content(config: SiteConfig,
                       context: Optional[BuildContext] = None) -> SiteContent:
    """Run the whole pipeline for one content tree.

    Pass a BuildContext to replace the default collaborators (markdown
    renderer, image measurer, directory lister). Its config must be the
    one being built; a ValueError is raised otherwise.
    """
    ctx = context or BuildContext(config=config)
    if ctx.config != config:
        raise ValueError(f"BuildContext was created for a different config ({ctx.config.root})")

    ctx.reference = load_reference_data(config.data_dir, config.public_dir, ctx.render)
    reference = ctx.reference
    logger.debug("loaded %d tag(s), %d license(s), %d role(s)",
                 len(reference.tags), len(reference.licenses), len(reference.roles))

    ctx.authors = enrich_authors(reference.unicorns, config.data_dir,
                                 ctx.measure, reference.find_role)

    shells = build_collections(ctx)
    posts = build_posts(shells, ctx)
    collections = link_collections(shells, posts)

    logger.info("Built %d posts and %d collections from %s",
                len(posts), len(collections), config.root)

    return SiteContent(
        about=reference.about,
        unicorns=ctx.authors,
        roles=reference.roles,
        licenses=reference.licenses,
        collections=collections,
        posts=posts,
        tags=reference.tags,
    )
