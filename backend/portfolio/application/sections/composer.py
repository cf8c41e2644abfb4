import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from portfolio.domain.exceptions import DataAccessError
from portfolio.domain.sections import default_sections
from .blocks import SECTION_BLOCKS, BlockSpec

logger = logging.getLogger(__name__)


@dataclass
class RenderedBlock:
    name: str
    anchor: str
    data: Dict[str, Any]

    def to_dict(self):
        return {"name": self.name, "anchor": self.anchor, "data": self.data}


@dataclass
class ComposedPage:
    loading: bool
    blocks: List[RenderedBlock] = field(default_factory=list)
    fallback: bool = False

    @property
    def names(self) -> List[str]:
        return [block.name for block in self.blocks]

    def to_dict(self):
        return {
            "loading": self.loading,
            "fallback": self.fallback,
            "sections": [block.to_dict() for block in self.blocks],
        }


class PageComposer:
    """Turns the visible, ordered sections of a store into page blocks."""

    def __init__(self, client, blocks: Optional[Dict[str, BlockSpec]] = None):
        self.client = client
        self.blocks = SECTION_BLOCKS if blocks is None else blocks

    def load(self, store):
        """
        Refresh the store, falling back to the built-in order (all visible)
        when the registry cannot be read.
        """
        try:
            store.refresh()
        except DataAccessError as exc:
            logger.error("Error fetching sections, using default order: %s", exc)
            store.use_fallback(default_sections())
        return store

    def compose(self, store) -> ComposedPage:
        if store.loading:
            return ComposedPage(loading=True)

        rendered = []
        for section in store.visible():
            spec = self.blocks.get(section.name)
            if spec is None:
                logger.debug("No block registered for section %r", section.name)
                continue

            block = self._render(section.name, spec)
            if block is not None:
                rendered.append(block)

        return ComposedPage(loading=False, blocks=rendered, fallback=store.fallback)

    def _render(self, name, spec):
        try:
            data = spec.render(self.client)
        except DataAccessError as exc:
            logger.warning("Failed to load content for %s: %s", name, exc)
            if spec.optional:
                return None
            data = {}

        if data is None:
            return None
        return RenderedBlock(name=name, anchor=spec.anchor, data=data)
