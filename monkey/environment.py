from typing import Dict, Optional

from monkey.object import Object


class Environment:
    """Represents a scope mapping identifiers to values, chained to an outer scope."""
    def __init__(self, outer: Optional['Environment'] = None):
        self.outer = outer
        self.store: Dict[str, Object] = {}

    @classmethod
    def enclosed(cls, outer: 'Environment') -> 'Environment':
        return cls(outer=outer)

    def get(self, name: str) -> Optional[Object]:
        if name in self.store:
            return self.store[name]
        if self.outer is not None:
            return self.outer.get(name)
        return None

    def set(self, name: str, value: Object) -> Object:
        # Bindings always land in this scope; rebinding overwrites
        self.store[name] = value
        return value
