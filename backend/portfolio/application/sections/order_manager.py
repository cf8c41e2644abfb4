import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional

from portfolio.domain.exceptions import DataAccessError, RecordNotFound, ValidationError
from portfolio.domain.sections import Direction, ReorderState, Section

logger = logging.getLogger(__name__)


class ReorderGate:
    """Allows one reorder at a time within this process."""

    def __init__(self):
        self._lock = threading.Lock()

    def try_acquire(self) -> bool:
        return self._lock.acquire(blocking=False)

    def release(self) -> None:
        self._lock.release()

    @property
    def held(self) -> bool:
        return self._lock.locked()


@dataclass
class ReorderResult:
    # moved | boundary | unchanged | rejected | reverted
    status: str
    sections: List[Section] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.status in ("moved", "reverted")


class SectionOrderManager:
    """
    Visibility and ordering of the public page sections.

    A move runs through IDLE -> SWAPPING -> PERSISTING_FIRST ->
    PERSISTING_SECOND -> RECONCILING -> IDLE. A write failure jumps straight
    to RECONCILING, which reloads the canonical order from storage.
    """

    collection = "sections"

    def __init__(
        self,
        client,
        store,
        gate: Optional[ReorderGate] = None,
        on_transition: Optional[Callable[[ReorderState], None]] = None,
    ):
        self.client = client
        self.store = store
        self.gate = gate or ReorderGate()
        self.on_transition = on_transition
        self.state = ReorderState.IDLE
        self.transitions: List[ReorderState] = []

    def list_sections(self) -> List[Section]:
        return self.store.refresh()

    def toggle_visibility(self, section_id) -> Section:
        section = self.store.find(section_id)
        if section is None:
            self.store.refresh()
            section = self.store.find(section_id)
        if section is None:
            raise RecordNotFound(self.collection, section_id)

        flipped = section.toggled()
        try:
            record = self.client.update(
                self.collection, section_id, {"is_visible": flipped.is_visible}
            )
        except DataAccessError as exc:
            logger.error("Failed to toggle visibility of %s: %s", section.name, exc)
            self.store.refresh()
            return self.store.find(section_id) or section

        updated = Section.from_record(record)
        self.store.put(updated)
        return updated

    def move_section(self, current_index: int, direction) -> ReorderResult:
        try:
            direction = Direction(direction)
        except ValueError:
            raise ValidationError(f"Invalid direction '{direction}'", fields=["direction"]) from None

        sections = list(self.store.sections)
        if not 0 <= current_index < len(sections):
            raise ValidationError(
                f"Section index {current_index} is out of range", fields=["index"]
            )

        if direction is Direction.UP and current_index == 0:
            return ReorderResult("boundary", sections)
        if direction is Direction.DOWN and current_index == len(sections) - 1:
            return ReorderResult("boundary", sections)

        target_index = current_index - 1 if direction is Direction.UP else current_index + 1
        current, target = sections[current_index], sections[target_index]
        if current.order_index == target.order_index:
            # Swapping equal values writes nothing new
            logger.warning(
                "Cannot move %s past %s: both have order_index %d",
                current.name, target.name, current.order_index
            )
            return ReorderResult("unchanged", sections)

        if not self.gate.try_acquire():
            logger.info("Reorder already in progress; dropping move of index %d", current_index)
            return ReorderResult("rejected", list(self.store.sections))

        self.transitions = []
        try:
            return self._swap(sections, current_index, target_index)
        finally:
            self._enter(ReorderState.IDLE)
            self.gate.release()

    def _swap(self, sections, current_index, target_index):
        current = sections[current_index]
        target = sections[target_index]

        self._enter(ReorderState.SWAPPING)
        swapped = list(sections)
        swapped[current_index] = replace(target, order_index=current.order_index)
        swapped[target_index] = replace(current, order_index=target.order_index)
        self.store.set_order(swapped)

        status = "moved"
        try:
            # Both rows change in one transaction so no reader sees a
            # half-applied swap.
            with self.client.transaction():
                self._enter(ReorderState.PERSISTING_FIRST)
                self.client.update(
                    self.collection, current.id, {"order_index": target.order_index}
                )
                self._enter(ReorderState.PERSISTING_SECOND)
                self.client.update(
                    self.collection, target.id, {"order_index": current.order_index}
                )
        except DataAccessError as exc:
            logger.error("Error reordering sections %s/%s: %s", current.name, target.name, exc)
            status = "reverted"
            # The swap was rolled back, so the pre-move order is canonical
            # until the reload below says otherwise.
            self.store.set_order(sections)

        self._enter(ReorderState.RECONCILING)
        try:
            reconciled = self.store.refresh()
        except DataAccessError as exc:
            logger.error("Failed to reload sections after reorder: %s", exc)
            reconciled = list(self.store.sections)

        return ReorderResult(status, reconciled)

    def _enter(self, state: ReorderState) -> None:
        self.state = state
        self.transitions.append(state)
        if self.on_transition is not None:
            self.on_transition(state)
