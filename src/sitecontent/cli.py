"""
Command line entry point

Usage:
    sitecontent build --root . --output content.json
    sitecontent stats --root .
"""

import argparse
import json
import sys
from pathlib import Path

from .config import SiteConfig
from .errors import ContentError
from .logging_setup import configure_logging
from .pipeline import build_site_content

DEFAULT_OUTPUT = 'content.json'


def add_path_arguments(parser: argparse.ArgumentParser):
    parser.add_argument('--root', help='Project root (default: $SITECONTENT_ROOT or cwd)')
    parser.add_argument('--posts-dir', help='Posts directory (default: ROOT/content/blog)')
    parser.add_argument('--collections-dir',
                        help='Collections directory (default: ROOT/content/collections)')
    parser.add_argument('--data-dir', help='Reference data directory (default: ROOT/content/data)')
    parser.add_argument('--public-dir', help='Public assets directory (default: ROOT/public)')


def config_from_args(args) -> SiteConfig:
    overrides = dict(
        posts_dir=args.posts_dir,
        collections_dir=args.collections_dir,
        data_dir=args.data_dir,
        public_dir=args.public_dir,
    )
    if args.root:
        return SiteConfig.from_root(args.root, **overrides)
    return SiteConfig.from_env(**overrides)


def cmd_build(args) -> int:
    content = build_site_content(config_from_args(args))

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, 'w', encoding='utf-8') as f:
        json.dump(content.to_dict(), f, indent=2, ensure_ascii=False)

    print(f"Built {len(content.posts)} posts, {len(content.collections)} collections -> {output}")
    return 0


def cmd_stats(args) -> int:
    content = build_site_content(config_from_args(args))

    print(f"Posts:       {len(content.posts)}")
    for locale, count in sorted(content.locale_counts().items()):
        print(f"  {locale}: {count}")
    print(f"Collections: {len(content.collections)}")
    print(f"Authors:     {len(content.unicorns)}")
    print(f"Tags:        {len(content.tags)}")

    banners = sum(1 for post in content.posts if post.banner_img)
    dropped = sum(len(post.dropped_tags) for post in content.posts)
    print(f"Banners:     {banners}")
    print(f"Dropped tags: {dropped}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='sitecontent',
        description='Aggregate blog posts and collections into enriched records',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    build = subparsers.add_parser('build', help='Build the content manifest (JSON)')
    add_path_arguments(build)
    build.add_argument('--output', '-o', default=DEFAULT_OUTPUT,
                       help=f'Output file (default: {DEFAULT_OUTPUT})')
    build.set_defaults(func=cmd_build)

    stats = subparsers.add_parser('stats', help='Print content statistics')
    add_path_arguments(stats)
    stats.set_defaults(func=cmd_stats)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    try:
        return args.func(args)
    except ContentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
