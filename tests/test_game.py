"""Tests for the turn loop, driven through a scripted terminal."""

from advent77.engine.game import Outcome, pause
from advent77.engine.objects import CARRIED
from advent77.engine.state import GRATE, LAMP, ROD
from advent77.engine.vocabulary import misunderstood_reply
from conftest import ScriptedRandom, ScriptedTerminal


def test_opening(play):
    result = play([])
    assert result.outcome is Outcome.COMPLETED
    assert result.trace == [1]
    assert result.text.startswith("PAUSE: INIT DONE\n")
    assert "WELCOME TO ADVENTURE!!" in result.text
    assert "YOU ARE STANDING AT THE END OF A ROAD" in result.text


def test_instructions(play):
    result = play([], opening=["g", "yes"])
    assert "SOMEWHERE NEARBY IS COLOSSAL CAVE" in result.text


def test_eof_before_start(play):
    result = play([], opening=[])
    assert result.outcome is Outcome.COMPLETED
    assert result.trace == []


def test_terminate_at_first_pause(play):
    result = play([], opening=["x"])
    assert result.outcome is Outcome.TERMINATED


def test_pause_ignores_other_answers():
    terminal = ScriptedTerminal(["maybe", " g "])
    assert pause(terminal, "INIT DONE") is None
    assert terminal.text.count("TO RESUME EXECUTION, TYPE: G") == 2
    assert terminal.text.endswith("EXECUTION RESUMED\n\n")


def test_enter_building(play):
    result = play(["in"])
    assert result.trace == [1, 3]
    assert "YOU ARE INSIDE A BUILDING, A WELL HOUSE FOR A LARGE SPRING." in result.text
    assert "THERE IS A SHINY BRASS LAMP NEARBY." in result.text


def test_take_lamp(play):
    result = play(["in", "get lamp"])
    assert result.state.objects.where(LAMP) == CARRIED
    assert LAMP not in result.state.objects.at(3)
    assert result.text.rstrip().endswith("OK")


def test_magic_word_both_ways(play):
    result = play(["in", "get lamp", "light lamp", "xyzzy", "xyzzy"])
    assert result.trace == [1, 3, 11, 3]
    assert "YOUR LAMP IS NOW ON." in result.text
    assert "PITCH BLACK" not in result.text


def test_second_visit_is_abbreviated(play):
    result = play(["in", "out"])
    assert result.trace == [1, 3, 1]
    assert "YOU'RE AT END OF ROAD AGAIN." in result.text


def test_no_way(play):
    result = play(["up"])
    assert result.trace == [1, 1]
    assert "THERE IS NO WAY TO GO THAT DIRECTION." in result.text


def test_xyzzy_outside(play):
    result = play(["xyzzy"])
    assert result.trace == [1, 1]
    assert "NOTHING HAPPENS." in result.text


def test_look_three_times(play):
    result = play(["look"] * 4)
    assert result.trace == [1] * 5
    assert result.text.count("SORRY, BUT I AM NOT ALLOWED") == 3
    assert result.state.look_count == 4


def test_look_counter_resets_in_new_room(play):
    result = play(["look"] * 4 + ["in", "look"])
    assert result.text.count("SORRY, BUT I AM NOT ALLOWED") == 4
    assert result.state.look_count == 1


def test_grate_word_leads_to_depression(play):
    result = play(["grate"])
    assert result.trace == [1, 8]
    assert "THE GRATE IS LOCKED" in result.text


def test_take_fixed_object(play):
    result = play(["grate", "get grate"])
    assert "YOU CAN'T BE SERIOUS!" in result.text
    assert result.state.objects.where(GRATE) == 8


def test_unlock_grate_and_go_down(play):
    result = play(["in", "get keys", "out", "grate", "unlock grate", "look", "down"])
    assert result.trace == [1, 3, 1, 8, 8, 9]
    assert "THE GRATE IS NOW UNLOCKED." in result.text
    assert result.state.prop(GRATE) == 1
    assert "THE GRATE IS OPEN." in result.text


def test_locked_grate_stops_descent(play):
    result = play(["grate", "down"])
    assert result.trace == [1, 8, 23, 8]


def test_unlock_without_keys(play):
    result = play(["grate", "unlock grate"])
    assert "YOU HAVE NO KEYS!" in result.text


def test_confused_at_the_grate(play):
    result = play(["grate", "foo", "foo", "foo", "no"])
    assert result.text.count("I DON'T KNOW THAT WORD.") == 3
    assert "ARE YOU TRYING TO GET INTO THE CAVE?" in result.text
    assert result.text.rstrip().endswith("OK")


def test_confused_at_the_grate_yes(play):
    result = play(["grate", "foo", "foo", "foo", "yes"])
    assert "THE GRATE IS VERY SOLID" in result.text


def test_misunderstood_replies():
    rng = ScriptedRandom([0.9, 0.1, 0.1, 0.9])
    assert misunderstood_reply(rng) == 61
    assert misunderstood_reply(rng) == 13
    assert rng.sites == [30001, 30002, 30001, 30002]


def test_dummy_verb(play):
    result = play(["in", "dummy lamp"])
    assert "I DON'T KNOW THAT WORD." in result.text


def test_object_alone_asks_what_to_do(play):
    result = play(["in", "lamp", "get"])
    assert " WHAT DO YOU WANT TO DO WITH THE LAMP ?\n" in result.text
    assert result.state.objects.is_carried(LAMP)


def test_verb_alone_asks_what(play):
    result = play(["in", "get lamp", "drop", "lamp"])
    assert "  DROP  WHAT?\n" in result.text
    assert result.state.objects.where(LAMP) == 3


def test_object_not_here(play):
    result = play(["get diamonds", "diamonds"])
    assert " I SEE NO DIAMO HERE.\n" in result.text
    assert " I SEE NO DIAMONDS   HERE.\n" in result.text


def test_feet_wet(play):
    result = play(["enter stream"])
    assert "YOUR FEET ARE NOW WET." in result.text
    assert result.trace == [1]


def test_enter_uses_second_word(play):
    result = play(["enter building"])
    assert result.trace == [1, 3]


def test_west_hint(play):
    result = play(["west"] * 12)
    assert result.text.count("IF YOU PREFER, SIMPLY TYPE W RATHER THAN WEST.") == 1
    assert result.state.west_count == 12


def test_dark_fall(play):
    result = play(["in", "xyzzy", "xyzzy", "g"])
    assert result.trace == [1, 3, 11]
    assert "IT IS NOW PITCH BLACK" in result.text
    assert "YOU FELL INTO A PIT" in result.text
    assert "PAUSE: GAME IS OVER" in result.text
    assert result.state.deaths == 1
    assert result.state.current_room == 11
    assert result.outcome is Outcome.COMPLETED


def test_dark_fall_terminate(play):
    result = play(["in", "xyzzy", "xyzzy", "x"])
    assert result.outcome is Outcome.TERMINATED


def test_dark_but_lucky(play):
    result = play(["in", "xyzzy", "xyzzy"], rng=ScriptedRandom(default=0.9))
    assert result.trace == [1, 3, 11, 3]
    assert result.state.deaths == 0


def test_take_alone_picks_up_sole_object(play):
    result = play(["in", "get lamp", "xyzzy", "light lamp", "get"])
    assert result.state.objects.is_carried(ROD)


def test_help(play):
    result = play(["help"])
    assert result.trace == [1]
    assert "I KNOW OF PLACES, ACTIONS, AND THINGS." in result.text
    assert result.state.commands == 1


def test_kill_bird(play):
    result = play(
        [
            "in",
            "get lamp",
            "xyzzy",
            "light lamp",
            "low",
            "get cage",
            "pit",
            "east",
            "kill bird",
        ]
    )
    assert result.trace[-1] == 13
    assert "THE LITTLE BIRD IS NOW DEAD" in result.text
    assert result.text.rstrip().endswith("OK")


def test_strike_fissure_shows_bridge(play):
    result = play(
        [
            "in",
            "get lamp",
            "xyzzy",
            "light lamp",
            "pit",
            "down",
            "hall",
            "strike fissure",
        ]
    )
    assert result.trace == [1, 3, 11, 14, 15, 17]
    assert "A CRYSTAL BRIDGE NOW SPANS THE FISSURE." in result.text
