"""
Build configuration

A single SiteConfig is created at process start and handed to every
stage of the pipeline.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Tuple


ROOT_ENV = 'SITECONTENT_ROOT'

POSTS_SUBDIR = Path('content') / 'blog'
COLLECTIONS_SUBDIR = Path('content') / 'collections'
DATA_SUBDIR = Path('content') / 'data'
PUBLIC_SUBDIR = Path('public')


@dataclass(frozen=True)
class SiteConfig:
    """Locations of the content tree and pagination settings"""
    root: Path
    posts_dir: Path
    collections_dir: Path
    data_dir: Path
    public_dir: Path
    page_size: int = 8  # posts per listing page
    banner_positions: Tuple[int, ...] = (0, 4)  # page slots that get a banner
    default_locale: str = 'en'  # locale of a plain index.md
    collection_mapping_file: str = 'collection-mapping.yaml'

    @classmethod
    def from_root(cls, root, **overrides) -> 'SiteConfig':
        """Build the default layout below `root`, then apply overrides.

        Overrides set to None are ignored so CLI flags can be passed
        straight through.
        """
        root = Path(root)
        config = cls(
            root=root,
            posts_dir=root / POSTS_SUBDIR,
            collections_dir=root / COLLECTIONS_SUBDIR,
            data_dir=root / DATA_SUBDIR,
            public_dir=root / PUBLIC_SUBDIR,
        )
        overrides = {k: v for k, v in overrides.items() if v is not None}
        for key in ('posts_dir', 'collections_dir', 'data_dir', 'public_dir'):
            if key in overrides:
                overrides[key] = Path(overrides[key])
        return replace(config, **overrides) if overrides else config

    @classmethod
    def from_env(cls, **overrides) -> 'SiteConfig':
        """Use $SITECONTENT_ROOT as the project root, or the cwd."""
        return cls.from_root(os.environ.get(ROOT_ENV) or Path.cwd(), **overrides)

    @property
    def collection_mapping_path(self) -> Path:
        return self.data_dir / self.collection_mapping_file
