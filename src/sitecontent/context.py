"""
Shared state of one build

A BuildContext is created once per build and handed to every stage;
nothing in the pipeline reads module-level state.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .collaborators import list_dir, measure_image, render_markdown
from .config import SiteConfig
from .reference import ReferenceData
from .schema import AuthorRecord


@dataclass
class BuildContext:
    """Configuration, collaborators and the reference data built so far"""
    config: SiteConfig
    render: Callable = render_markdown
    measure: Callable = measure_image
    list_dir: Callable = list_dir
    reference: Optional[ReferenceData] = None
    authors: List[AuthorRecord] = field(default_factory=list)

    def require_reference(self) -> ReferenceData:
        if self.reference is None:
            raise RuntimeError("reference data has not been loaded yet")
        return self.reference
