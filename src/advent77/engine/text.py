"""Rendering stored text for the terminal."""

from .state import NUGGET, STEPS, STEPS_BELOW, GameState
from .world import TextBlock, World

# Steps are not worth mentioning while the player is carrying the gold
_HIDDEN_WITH_NUGGET = (STEPS, STEPS_BELOW)


def render(block: TextBlock | None) -> str:
    """Each line of the block, then one blank line."""
    if not block:
        return ""
    return "".join(line.render() + "\n" for line in block) + "\n"


def message(world: World, number: int) -> str:
    """Render a numbered message; 0 means no message."""
    if number == 0:
        return ""
    return render(world.messages.get(number))


def describe_room(world: World, state: GameState, number: int) -> str:
    room = world.room(number)
    text = room.short_text if state.abbreviations.get(number, 0) else None
    return render(text or room.long_text)


def list_objects(world: World, state: GameState, number: int) -> str:
    """State descriptions of everything lying in a room."""
    parts = []
    for obj in state.objects.at(number):
        if obj in _HIDDEN_WITH_NUGGET and state.objects.is_carried(NUGGET):
            continue
        variant = 1 if state.prop(obj) else 0
        parts.append(render(world.object_text.get((obj, variant))))
    return "".join(parts)
