from collections import defaultdict
from typing import Dict, Iterable, List


def find_order_conflicts(sections: Iterable) -> Dict[int, List[str]]:
    """
    Return order_index values shared by more than one section, mapped to
    the names holding them.

    The store does not enforce uniqueness, so callers report conflicts
    instead of repairing them.
    """
    by_index = defaultdict(list)
    for section in sections:
        by_index[section.order_index].append(section.name)

    return {
        index: names
        for index, names in sorted(by_index.items())
        if len(names) > 1
    }
