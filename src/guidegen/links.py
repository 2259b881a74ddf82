"""Public links for exported examples."""

from dataclasses import dataclass
from typing import Optional

from .constants import EXAMPLES_NAMESPACE, SOURCE_SUFFIX
from .paths import padded_index


@dataclass(frozen=True)
class LinkBuilder:
    """Builds the public URL of the exported example at a given index."""

    web_root_url: str
    rel_dir: str
    base_name: str

    def __call__(self, index: int) -> str:
        parts = [self.web_root_url.rstrip("/"), EXAMPLES_NAMESPACE]
        if self.rel_dir:
            parts.append(self.rel_dir.strip("/"))
        parts.append(f"{self.base_name}{padded_index(index)}{SOURCE_SUFFIX}")
        return "/".join(parts)


def make_link_builder(
    web_root_url: Optional[str], rel_dir: str, base_name: str
) -> Optional[LinkBuilder]:
    """Return a LinkBuilder, or None when no public URL is configured."""
    if not web_root_url:
        return None
    return LinkBuilder(web_root_url, rel_dir, base_name)
