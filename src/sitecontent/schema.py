"""
Record types produced by the content pipeline.

Reference data (authors, tags) is built first, then collections without
their post lists (CollectionShell), then posts, and finally the linker
turns each shell into a CollectionRecord carrying its posts.

Raw content keys are camelCase (`coverImg`, `originalLink`, ...); the
records use snake_case and keep any key they do not model in `extra`.
"""

from dataclasses import asdict, dataclass, field, fields
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple


def split_known(data: dict, known: Dict[str, str]) -> Tuple[dict, dict]:
    """Split raw data into (modelled fields renamed to attribute names, extra keys)."""
    values = {}
    extra = {}
    for key, value in data.items():
        if key in known:
            values[known[key]] = value
        else:
            extra[key] = value
    return values, extra


def to_jsonable(value: Any) -> Any:
    """Convert dates (and containers of them) into JSON-friendly values."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


@dataclass
class ImageMeta:
    """Size and path variants of an image referenced by a record"""
    width: int
    height: int
    relative_path: str  # as written in the source data
    relative_server_path: str  # path the site serves it from
    absolute_fs_path: str


@dataclass
class Socials:
    """Normalized social media handles of an author"""
    twitter: Optional[str] = None
    github: Optional[str] = None
    gitlab: Optional[str] = None
    linked_in: Optional[str] = None
    twitch: Optional[str] = None
    dribbble: Optional[str] = None
    threads: Optional[str] = None
    cohost: Optional[str] = None
    mastodon: Optional[str] = None  # full URL
    youtube: Optional[str] = None  # full URL
    website: Optional[str] = None
    extra: dict = field(default_factory=dict)

    KEYS = {
        'twitter': 'twitter',
        'github': 'github',
        'gitlab': 'gitlab',
        'linkedIn': 'linked_in',
        'twitch': 'twitch',
        'dribbble': 'dribbble',
        'threads': 'threads',
        'cohost': 'cohost',
        'mastodon': 'mastodon',
        'youtube': 'youtube',
        'website': 'website',
    }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'Socials':
        values, extra = split_known(data or {}, cls.KEYS)
        return cls(extra=extra, **values)


@dataclass
class AuthorRecord:
    """An author ("unicorn") with resolved image, roles and socials"""
    id: str
    name: str
    profile_img: str
    description: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    pronouns: Optional[str] = None
    color: Optional[str] = None
    roles: List[str] = field(default_factory=list)
    achievements: List[Any] = field(default_factory=list)
    socials: Socials = field(default_factory=Socials)
    extra: dict = field(default_factory=dict)

    # Computed at build time
    profile_img_meta: Optional[ImageMeta] = None
    roles_meta: List[Optional[dict]] = field(default_factory=list)  # None = unknown role id

    KEYS = {
        'id': 'id',
        'name': 'name',
        'profileImg': 'profile_img',
        'description': 'description',
        'firstName': 'first_name',
        'lastName': 'last_name',
        'pronouns': 'pronouns',
        'color': 'color',
        'roles': 'roles',
        'achievements': 'achievements',
    }

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass
class TagRecord:
    """A tag from tags.json plus its optional license/attribution explainer"""
    id: str
    display_name: Optional[str] = None
    image: Optional[str] = None
    emoji: Optional[str] = None
    shown_with_branding: bool = False
    explainer_html: Optional[str] = None
    explainer_type: Optional[str] = None  # 'license', 'attribution' or None
    extra: dict = field(default_factory=dict)

    KEYS = {
        'displayName': 'display_name',
        'image': 'image',
        'emoji': 'emoji',
        'shownWithBranding': 'shown_with_branding',
    }

    @property
    def label(self) -> str:
        return self.display_name or self.id

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CollectionShell:
    """A collection before the linker attaches its posts"""
    slug: str
    locale: str
    locales: List[str]
    title: str
    authors: List[str]
    cover_img: str
    published: Any = None
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    extra: dict = field(default_factory=dict)

    # Computed at build time
    cover_img_meta: Optional[ImageMeta] = None
    authors_meta: List[Optional[AuthorRecord]] = field(default_factory=list)  # None = unknown author id
    published_meta: Optional[str] = None

    KEYS = {
        'title': 'title',
        'authors': 'authors',
        'coverImg': 'cover_img',
        'published': 'published',
        'description': 'description',
        'tags': 'tags',
    }

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass
class PostRecord:
    """A single locale of a blog post"""
    slug: str
    locale: str
    locales: List[str]
    title: str
    authors: List[str]
    published: Any = None
    edited: Any = None
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)  # only tags known to tags.json
    attached: List[str] = field(default_factory=list)
    license: Optional[str] = None
    collection: Optional[str] = None  # slug of the owning collection
    order: Optional[int] = None  # position within the collection
    original_link: Optional[str] = None
    noindex: bool = False
    extra: dict = field(default_factory=dict)

    # Computed at build time
    authors_meta: List[Optional[AuthorRecord]] = field(default_factory=list)
    license_meta: Optional[dict] = None
    collection_meta: Optional[CollectionShell] = None
    published_meta: Optional[str] = None
    edited_meta: Optional[str] = None
    dropped_tags: List[str] = field(default_factory=list)  # frontmatter tags missing from tags.json
    word_count: int = 0
    social_img: Optional[str] = None
    banner_img: Optional[str] = None

    KEYS = {
        'title': 'title',
        'authors': 'authors',
        'published': 'published',
        'edited': 'edited',
        'description': 'description',
        'tags': 'tags',
        'attached': 'attached',
        'license': 'license',
        'collection': 'collection',
        'order': 'order',
        'originalLink': 'original_link',
        'noindex': 'noindex',
    }

    def to_dict(self) -> dict:
        return to_jsonable(asdict(self))


@dataclass
class CollectionRecord(CollectionShell):
    """A collection together with its posts, in global post order"""
    posts: List[PostRecord] = field(default_factory=list)

    @classmethod
    def from_shell(cls, shell: CollectionShell, posts: List[PostRecord]) -> 'CollectionRecord':
        values = {f.name: getattr(shell, f.name) for f in fields(shell)}
        return cls(posts=posts, **values)
