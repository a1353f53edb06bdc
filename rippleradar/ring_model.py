"""
Membership registry backing a ring
"""

from typing import Dict, Iterator

from rippleradar.item import Item


class RingModel:
    """Set of items on one ring, unique by key"""

    def __init__(self):
        self.members: Dict[str, Item] = {}

    def add(self, item: Item) -> bool:
        """Insert the item; False if its key is already present"""
        if item.key in self.members:
            return False
        self.members[item.key] = item
        return True

    def remove(self, item: Item) -> bool:
        """Delete the item; False if its key is not present"""
        if item.key not in self.members:
            return False
        del self.members[item.key]
        return True

    def clear(self) -> None:
        self.members.clear()

    def __contains__(self, item: object) -> bool:
        key = item.key if isinstance(item, Item) else item
        return key in self.members

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self.members.values()))
