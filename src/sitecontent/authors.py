"""
Author ("unicorn") enrichment

Turns raw records from unicorns.json into AuthorRecords: profile image
size and paths, role objects, and social handles normalized so a bare
handle and a full profile URL end up as the same value.
"""

import logging
import re
from pathlib import Path
from typing import Callable, List, Optional
from urllib.parse import quote, urlsplit, urlunsplit

from .errors import FrontmatterError, InvalidSocialUrlError
from .schema import AuthorRecord, ImageMeta, Socials, split_known

logger = logging.getLogger(__name__)

# Everything up to the last '/' or '@' that is not the final character
USERNAME_PREFIX_RE = re.compile(r'^.*[/@](?!$)')
SCHEME_RE = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*$')
URL_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
# Schemes that need a host; their default port is dropped
DEFAULT_PORTS = {
    'http': 80,
    'https': 443,
    'ws': 80,
    'wss': 443,
    'ftp': 21,
}

USERNAME_FIELDS = [
    'twitter',
    'github',
    'gitlab',
    'linked_in',
    'twitch',
    'dribbble',
    'threads',
    'cohost',
]

YOUTUBE_BASE = 'https://www.youtube.com'
DATA_SERVER_PREFIX = '/content/data/'


def normalize_username(value: Optional[str]) -> Optional[str]:
    """Reduce a handle, '@handle' or profile URL to the bare handle.

    >>> normalize_username('https://github.com/torvalds')
    'torvalds'
    """
    if value is None:
        return None
    value = value.strip().rstrip('/')
    return USERNAME_PREFIX_RE.sub('', value, count=1)


def normalize_url(value: str) -> str:
    """Validate an absolute URL and return it in canonical form.

    Scheme and host are lower-cased, a default port is dropped, an empty
    path on a web URL becomes '/' and unsafe path characters are
    percent-encoded. Raises ValueError for anything that is not an
    absolute URL, including one with a malformed port.
    """
    parts = urlsplit(value.strip())
    if not parts.scheme or not SCHEME_RE.match(parts.scheme):
        raise ValueError(f"not an absolute URL: {value!r}")
    scheme = parts.scheme.lower()
    path = quote(parts.path, safe=URL_PATH_SAFE)

    if scheme not in DEFAULT_PORTS:
        # mailto:, urn: and friends have no host to check
        if not parts.netloc and not path:
            raise ValueError(f"not an absolute URL: {value!r}")
        return urlunsplit((scheme, parts.netloc, path, parts.query, parts.fragment))

    if not parts.netloc or not parts.hostname:
        raise ValueError(f"URL has no host: {value!r}")
    port = parts.port
    if port == DEFAULT_PORTS[scheme]:
        port = None

    netloc = parts.netloc
    userinfo = netloc[:netloc.rfind('@') + 1]
    host = parts.hostname
    if ':' in host:
        host = f"[{host}]"
    netloc = userinfo + host + (f":{port}" if port is not None else '')
    return urlunsplit((scheme, netloc, path or '/', parts.query, parts.fragment))


def normalize_mastodon(author_id: str, value: Optional[str]) -> Optional[str]:
    """Mastodon handles are ambiguous without a host, so a full URL is required."""
    if not value:
        return value
    try:
        return normalize_url(value)
    except ValueError as e:
        raise InvalidSocialUrlError(author_id, 'mastodon', value) from e


def normalize_youtube(value: Optional[str]) -> Optional[str]:
    """Canonical channel URL from either an '@handle' or a channel id.

    The two forms cannot be mixed: anything containing '@' is a handle.
    """
    if not value:
        return value
    username = normalize_username(value)
    if '@' in value:
        return f"{YOUTUBE_BASE}/@{username}"
    return f"{YOUTUBE_BASE}/channel/{username}"


def check_social_types(author_id: str, socials: Socials, source: Path):
    """Every known social field must be a string (or absent)."""
    for key, name in Socials.KEYS.items():
        value = getattr(socials, name)
        if value is not None and not isinstance(value, str):
            raise FrontmatterError(
                source, f"author '{author_id}' socials.{key} must be a string, got {value!r}")


def normalize_socials(author_id: str, socials: Socials) -> Socials:
    for name in USERNAME_FIELDS:
        setattr(socials, name, normalize_username(getattr(socials, name)))
    socials.mastodon = normalize_mastodon(author_id, socials.mastodon)
    socials.youtube = normalize_youtube(socials.youtube)
    return socials


def build_profile_img_meta(profile_img: str, data_dir: Path,
                           measure: Callable) -> ImageMeta:
    absolute = data_dir / profile_img
    size = measure(absolute)
    return ImageMeta(
        width=size.width,
        height=size.height,
        relative_path=profile_img,
        relative_server_path=server_path(DATA_SERVER_PREFIX, profile_img),
        absolute_fs_path=str(absolute),
    )


def server_path(*parts: str) -> str:
    """Join path pieces into a root-relative URL path: '/a/b/c'."""
    pieces = []
    for part in parts:
        for piece in str(part).split('/'):
            if piece in ('', '.'):
                continue
            if piece == '..':
                if pieces:
                    pieces.pop()
                continue
            pieces.append(piece)
    return '/' + '/'.join(pieces)


def enrich_author(raw: dict, data_dir: Path, measure: Callable,
                  find_role: Callable[[str], Optional[dict]]) -> AuthorRecord:
    """Build a fully resolved AuthorRecord from a unicorns.json entry.

    Raises FrontmatterError for a malformed record, ImageError if the
    profile image cannot be measured and InvalidSocialUrlError for a
    malformed mastodon URL.
    """
    values, extra = split_known(raw, AuthorRecord.KEYS)
    socials = Socials.from_dict(extra.pop('socials', None))
    author_id = values.get('id')
    source = data_dir / 'unicorns.json'
    if not author_id or not values.get('profile_img'):
        raise FrontmatterError(source, f"author '{author_id}' needs an id and a profileImg")
    check_social_types(author_id, socials, source)
    values.setdefault('name', author_id)
    if values.get('achievements') is None:
        values['achievements'] = []
    if values.get('roles') is None:
        values['roles'] = []

    author = AuthorRecord(socials=normalize_socials(author_id, socials),
                          extra=extra, **values)
    author.profile_img_meta = build_profile_img_meta(author.profile_img, data_dir, measure)

    author.roles_meta = []
    for role_id in author.roles:
        role = find_role(role_id)
        if role is None:
            logger.debug("%s: unknown role '%s'", author_id, role_id)
        author.roles_meta.append(role)

    return author


def enrich_authors(raw_authors: List[dict], data_dir: Path, measure: Callable,
                   find_role: Callable[[str], Optional[dict]]) -> List[AuthorRecord]:
    return [enrich_author(raw, data_dir, measure, find_role) for raw in raw_authors]


def find_author(authors: List[AuthorRecord], author_id: str) -> Optional[AuthorRecord]:
    for author in authors:
        if author.id == author_id:
            return author
    return None


def resolve_authors(authors: List[AuthorRecord], ids: List[str],
                    owner: str = '') -> List[Optional[AuthorRecord]]:
    """Look up each author id; unknown ids stay in place as None."""
    resolved = []
    for author_id in ids:
        author = find_author(authors, author_id)
        if author is None:
            logger.debug("%s: unknown author '%s'", owner, author_id)
        resolved.append(author)
    return resolved
