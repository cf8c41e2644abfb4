from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List


# Must match the renderers in application/sections/blocks.py; a name missing
# here is silently absent from the fallback page.
DEFAULT_SECTION_ORDER = (
    "Hero",
    "About",
    "Skills",
    "Projects",
    "Data Science Lab",
    "Blog",
    "Certificates",
    "Contact",
)


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


class ReorderState(str, Enum):
    IDLE = "idle"
    SWAPPING = "swapping"
    PERSISTING_FIRST = "persisting_first"
    PERSISTING_SECOND = "persisting_second"
    RECONCILING = "reconciling"


@dataclass(frozen=True)
class Section:
    id: Any
    name: str
    is_visible: bool
    order_index: int

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Section":
        return cls(
            id=record.get("id"),
            name=record["name"],
            is_visible=bool(record.get("is_visible", True)),
            order_index=int(record.get("order_index") or 0),
        )

    def toggled(self) -> "Section":
        return replace(self, is_visible=not self.is_visible)


def default_sections() -> List[Section]:
    """Every known section, visible, in the built-in order."""
    return [
        Section(id=None, name=name, is_visible=True, order_index=index)
        for index, name in enumerate(DEFAULT_SECTION_ORDER)
    ]
