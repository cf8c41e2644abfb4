import logging
from typing import List, Optional

from portfolio.domain.invariants.section import find_order_conflicts
from portfolio.domain.sections import Section

logger = logging.getLogger(__name__)


class SectionStore:
    """
    In-memory copy of the section registry.

    One instance is shared by reference between the order manager (which
    writes to it) and the page composer (which reads it). ``refresh()`` is
    the only way canonical state gets in.
    """

    collection = "sections"

    def __init__(self, client):
        self.client = client
        self.sections: List[Section] = []
        self.loading = False
        self.fallback = False
        self.conflicts = {}

    def refresh(self) -> List[Section]:
        """Reload every section ordered by order_index. Errors propagate."""
        self.loading = True
        try:
            records = self.client.select(self.collection, order_by="order_index")
        finally:
            self.loading = False

        self.sections = [Section.from_record(record) for record in records]
        self.fallback = False
        self.conflicts = find_order_conflicts(self.sections)

        if self.conflicts:
            logger.warning("Sections share an order_index: %s", self.conflicts)

        return list(self.sections)

    def use_fallback(self, sections: List[Section]) -> None:
        self.sections = list(sections)
        self.fallback = True
        self.conflicts = {}

    def set_order(self, sections: List[Section]) -> None:
        self.sections = list(sections)

    def find(self, section_id) -> Optional[Section]:
        return next((s for s in self.sections if s.id == section_id), None)

    def put(self, section: Section) -> None:
        self.sections = [
            section if s.id == section.id else s
            for s in self.sections
        ]

    def visible(self) -> List[Section]:
        return [
            s for s in sorted(self.sections, key=lambda s: s.order_index)
            if s.is_visible
        ]

    def __len__(self):
        return len(self.sections)
