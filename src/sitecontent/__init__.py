"""
sitecontent - Content aggregation for a static blog/portfolio site

Modules:
- reference: about/unicorns/roles/licenses/tags datasets
- authors: author enrichment and social handle normalization
- collection_loader: collection directories + collection mapping
- post_loader: posts, tag validation, word counts, banners
- linker: attaches posts to their collections
- pipeline: runs the stages in order
"""

from .authors import normalize_username, normalize_youtube, normalize_mastodon
from .config import SiteConfig
from .context import BuildContext
from .errors import ContentError, FrontmatterError, ImageError, InvalidSocialUrlError
from .pipeline import SiteContent, build_site_content
from .schema import (
    AuthorRecord,
    CollectionRecord,
    CollectionShell,
    ImageMeta,
    PostRecord,
    Socials,
    TagRecord,
)

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    'SiteConfig',
    'BuildContext',
    'SiteContent',
    'build_site_content',
    # Records
    'AuthorRecord',
    'CollectionRecord',
    'CollectionShell',
    'ImageMeta',
    'PostRecord',
    'Socials',
    'TagRecord',
    # Normalization
    'normalize_username',
    'normalize_youtube',
    'normalize_mastodon',
    # Errors
    'ContentError',
    'FrontmatterError',
    'ImageError',
    'InvalidSocialUrlError',
]
