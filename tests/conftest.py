"""
Pytest configuration and shared fixtures
"""

import json
import sys
from pathlib import Path

import pytest
import yaml
from PIL import Image

# Add source directory to Python path for imports
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from sitecontent.authors import enrich_authors  # noqa: E402
from sitecontent.config import SiteConfig  # noqa: E402
from sitecontent.context import BuildContext  # noqa: E402
from sitecontent.reference import load_reference_data  # noqa: E402


def write_png(path: Path, width: int = 40, height: int = 20):
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new('RGB', (width, height), color=(200, 30, 90)).save(path)


def write_markdown(path: Path, metadata: dict, body: str = 'Hello world'):
    path.parent.mkdir(parents=True, exist_ok=True)
    front = yaml.safe_dump(metadata, sort_keys=False, allow_unicode=True)
    path.write_text(f"---\n{front}---\n{body}\n", encoding='utf-8')


class SiteTree:
    """Builds a small content tree on disk for pipeline tests"""

    def __init__(self, root: Path):
        self.root = root
        self.config = SiteConfig.from_root(root)
        self.data_dir = self.config.data_dir
        self.public_dir = self.config.public_dir
        self.data_dir.mkdir(parents=True)
        self.public_dir.mkdir(parents=True)
        self.config.posts_dir.mkdir(parents=True)
        self.config.collections_dir.mkdir(parents=True)

        self.unicorns = [{
            'id': 'ava',
            'name': 'Ava Unicorn',
            'firstName': 'Ava',
            'lastName': 'Unicorn',
            'description': 'Writes about frameworks',
            'profileImg': './unicorns/ava.png',
            'roles': ['author', 'developer'],
            'socials': {
                'github': 'https://github.com/ava',
                'twitter': '@ava',
                'mastodon': 'https://Mastodon.Social/@ava',
                'youtube': '@avachannel',
            },
        }]
        self.roles = [
            {'id': 'author', 'prettyname': 'Author'},
            {'id': 'developer', 'prettyname': 'Developer'},
        ]
        self.licenses = [
            {'id': 'cc-by-4', 'displayName': 'Attribution 4.0 International'},
        ]
        self.tags = {
            'angular': {'displayName': 'Angular', 'image': '/stickers/angular.svg'},
            'react': {'displayName': 'React'},
            'javascript': {'displayName': 'JavaScript', 'emoji': '✨'},
        }
        self.about = {'name': 'Unicorn Utterances'}
        write_png(self.data_dir / 'unicorns' / 'ava.png', 64, 64)

    def write_data(self):
        for name, value in [
            ('about.json', self.about),
            ('unicorns.json', self.unicorns),
            ('roles.json', self.roles),
            ('licenses.json', self.licenses),
            ('tags.json', self.tags),
        ]:
            (self.data_dir / name).write_text(json.dumps(value), encoding='utf-8')
        return self

    def add_post(self, slug: str, locale: str = 'en', body: str = 'Hello world', **metadata):
        metadata.setdefault('title', slug.replace('-', ' ').title())
        metadata.setdefault('published', '2023-01-01T00:00:00Z')
        metadata.setdefault('authors', ['ava'])
        metadata.setdefault('tags', ['react'])
        metadata.setdefault('license', 'cc-by-4')
        name = 'index.md' if locale == 'en' else f'index.{locale}.md'
        path = self.config.posts_dir / slug / name
        write_markdown(path, metadata, body)
        return path

    def add_collection(self, slug: str, locale: str = 'en', **metadata):
        metadata.setdefault('title', slug.replace('-', ' ').title())
        metadata.setdefault('published', '2023-01-01T00:00:00Z')
        metadata.setdefault('authors', ['ava'])
        metadata.setdefault('coverImg', './cover.png')
        name = 'index.md' if locale == 'en' else f'index.{locale}.md'
        collection_dir = self.config.collections_dir / slug
        write_markdown(collection_dir / name, metadata, 'Collection intro')
        cover = collection_dir / metadata['coverImg']
        if not cover.exists():
            write_png(cover, 120, 60)
        return collection_dir / name

    def add_mapping(self, entries: list):
        self.config.collection_mapping_path.write_text(
            yaml.safe_dump(entries, sort_keys=False), encoding='utf-8'
        )

    def context(self, **collaborators) -> BuildContext:
        """Write the data files and run the reference and author stages."""
        self.write_data()
        ctx = BuildContext(config=self.config, **collaborators)
        ctx.reference = load_reference_data(self.data_dir, self.public_dir, ctx.render)
        ctx.authors = enrich_authors(ctx.reference.unicorns, self.data_dir,
                                     ctx.measure, ctx.reference.find_role)
        return ctx


@pytest.fixture
def site(tmp_path):
    """A content tree with reference data and no posts or collections"""
    return SiteTree(tmp_path / 'site')


@pytest.fixture
def fake_render():
    """Stand-in for the markdown renderer that records its input"""
    calls = []

    def render(text):
        calls.append(text)
        return f"<p>{text.strip()}</p>"

    render.calls = calls
    return render
