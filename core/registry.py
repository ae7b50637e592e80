from typing import Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class Registry(Generic[T]):
    """Name-keyed registry of strategies or validators, filled once at startup."""

    def __init__(self, kind: str):
        self.kind = kind
        self._items: Dict[str, T] = {}

    def register(self, item: T, condition: bool = True):
        """Register an item under its `name`, with optional enablement condition."""
        if not condition:
            return
        name = getattr(item, "name", "")
        if not name:
            raise ValueError(f"Cannot register {self.kind} without a name")
        self._items[name] = item

    def get(self, name: str) -> Optional[T]:
        return self._items.get(name)

    def names(self) -> List[str]:
        return list(self._items)

    def __contains__(self, name: str) -> bool:
        return name in self._items

    def __len__(self) -> int:
        return len(self._items)
