"""
Reference data: about, unicorns (authors), roles, licenses and tags

Everything except tags is passed through as loaded. Tags whose image is
an SVG may ship a sibling `-LICENSE.md` or `-ATTRIBUTION.md` file; its
rendered HTML becomes the tag's explainer.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from .errors import ContentError
from .schema import TagRecord, split_known

logger = logging.getLogger(__name__)

ABOUT_FILE = 'about.json'
UNICORNS_FILE = 'unicorns.json'
ROLES_FILE = 'roles.json'
LICENSES_FILE = 'licenses.json'
TAGS_FILE = 'tags.json'

EXPLAINER_IMAGE_EXT = '.svg'
# Checked in order; the first file found wins
EXPLAINER_SUFFIXES = [
    ('license', '-LICENSE.md'),
    ('attribution', '-ATTRIBUTION.md'),
]


@dataclass
class ReferenceData:
    """Static datasets the content records are cross-referenced against"""
    about: dict = field(default_factory=dict)
    unicorns: List[dict] = field(default_factory=list)  # raw author records
    roles: List[dict] = field(default_factory=list)
    licenses: List[dict] = field(default_factory=list)
    tags: Dict[str, TagRecord] = field(default_factory=dict)

    def find_role(self, role_id: str) -> Optional[dict]:
        return find_by_id(self.roles, role_id)

    def find_license(self, license_id: Optional[str]) -> Optional[dict]:
        if not license_id:
            return None
        return find_by_id(self.licenses, license_id)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


def find_by_id(records: List[dict], record_id: str) -> Optional[dict]:
    """First record whose 'id' matches, or None."""
    for record in records:
        if record.get('id') == record_id:
            return record
    return None


def load_json(path: Path, default=None):
    """Load a JSON data file.

    When `default` is given a missing file yields it; otherwise a missing
    or malformed file is fatal.
    """
    if default is not None and not path.exists():
        logger.debug("%s not found, using default", path.name)
        return default
    try:
        with open(path, encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ContentError(f"{path}: cannot load data file: {e}") from e


def read_optional_text(path: Path) -> Optional[str]:
    """File contents, or None when the file is missing or unreadable."""
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError):
        return None


def find_explainer(image: Optional[str], public_dir: Path) -> Tuple[Optional[str], Optional[str]]:
    """Return (explainer markdown, explainer type) for a tag image.

    Only SVG images carry explainers. The sibling file name replaces the
    first '.svg' of the image path.
    """
    if not image or not image.endswith(EXPLAINER_IMAGE_EXT):
        return None, None

    for explainer_type, suffix in EXPLAINER_SUFFIXES:
        sibling = image.replace(EXPLAINER_IMAGE_EXT, suffix, 1)
        text = read_optional_text(public_dir / sibling.lstrip('/'))
        if text:
            return text, explainer_type
    return None, None


def build_tag(tag_id: str, raw: dict, public_dir: Path,
              render: Callable[[str], str]) -> TagRecord:
    values, extra = split_known(raw, TagRecord.KEYS)
    explainer, explainer_type = find_explainer(values.get('image'), public_dir)
    explainer_html = render(explainer) if explainer else None
    if explainer_type:
        logger.debug("tag %s: using %s explainer", tag_id, explainer_type)
    return TagRecord(
        id=tag_id,
        explainer_html=explainer_html,
        explainer_type=explainer_type,
        extra=extra,
        **values,
    )


def load_tags(path: Path, public_dir: Path,
              render: Callable[[str], str]) -> Dict[str, TagRecord]:
    """Load tags.json into an id -> TagRecord mapping, in file order."""
    raw_tags = load_json(path)
    if not isinstance(raw_tags, dict):
        raise ContentError(f"{path}: expected an object keyed by tag id")
    return {
        tag_id: build_tag(tag_id, raw or {}, public_dir, render)
        for tag_id, raw in raw_tags.items()
    }


def load_reference_data(data_dir: Path, public_dir: Path,
                        render: Callable[[str], str]) -> ReferenceData:
    """Load every reference dataset from the data directory."""
    return ReferenceData(
        about=load_json(data_dir / ABOUT_FILE, default={}),
        unicorns=load_json(data_dir / UNICORNS_FILE),
        roles=load_json(data_dir / ROLES_FILE),
        licenses=load_json(data_dir / LICENSES_FILE),
        tags=load_tags(data_dir / TAGS_FILE, public_dir, render),
    )
