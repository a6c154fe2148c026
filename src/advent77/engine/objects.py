"""Where every object is.

Each object has one location: a room number, CARRIED, NOWHERE or REMOVED.
Each room keeps an ordered chain of the objects lying in it. The two views
are only ever changed together, so an object is in room R's chain exactly
when its location is R.
"""

from dataclasses import dataclass, field

CARRIED = -1
NOWHERE = 0
REMOVED = 300


@dataclass
class ObjectPlacement:
    location: dict[int, int] = field(default_factory=dict)
    fixed: set[int] = field(default_factory=set)
    chains: dict[int, list[int]] = field(default_factory=dict)

    def place(self, obj: int, room: int) -> None:
        """Put an object at the end of a room's chain (initial placement)."""
        self._detach(obj)
        self.location[obj] = room
        if NOWHERE < room < REMOVED:
            self.chains.setdefault(room, []).append(obj)

    def put(self, obj: int, room: int) -> None:
        """Put an object at the head of a room's chain (dropped or thrown)."""
        self._detach(obj)
        self.location[obj] = room
        self.chains.setdefault(room, []).insert(0, obj)

    def carry(self, obj: int) -> None:
        self._detach(obj)
        self.location[obj] = CARRIED

    def destroy(self, obj: int) -> None:
        self._detach(obj)
        self.location[obj] = REMOVED

    def _detach(self, obj: int) -> None:
        chain = self.chains.get(self.location.get(obj, NOWHERE))
        if chain and obj in chain:
            chain.remove(obj)

    def at(self, room: int) -> list[int]:
        """Objects lying in a room, head of the chain first."""
        return list(self.chains.get(room, ()))

    def where(self, obj: int) -> int:
        return self.location.get(obj, NOWHERE)

    def is_carried(self, obj: int) -> bool:
        return self.where(obj) == CARRIED

    def is_here(self, obj: int, room: int) -> bool:
        """True when the object is in the room or carried by the player."""
        return self.where(obj) in (room, CARRIED)

    def is_fixed(self, obj: int) -> bool:
        return obj in self.fixed
