"""Attach posts to the collections they belong to."""

from typing import List

from .schema import CollectionRecord, CollectionShell, PostRecord


def posts_in_collection(slug: str, posts: List[PostRecord]) -> List[PostRecord]:
    """Posts whose `collection` is `slug`, in the order given."""
    return [post for post in posts if post.collection == slug]


def link_collections(collections: List[CollectionShell],
                     posts: List[PostRecord]) -> List[CollectionRecord]:
    """Turn every shell into a CollectionRecord with its (possibly empty) post list."""
    return [
        CollectionRecord.from_shell(collection, posts_in_collection(collection.slug, posts))
        for collection in collections
    ]
