from .store import SectionStore
from .order_manager import SectionOrderManager, ReorderGate, ReorderResult
from .composer import PageComposer, ComposedPage, RenderedBlock

__all__ = [
    "SectionStore",
    "SectionOrderManager",
    "ReorderGate",
    "ReorderResult",
    "PageComposer",
    "ComposedPage",
    "RenderedBlock",
]
