from wumpus_core.bitboard import BitBoard
from wumpus_core.grid import Direction, Position, START
from wumpus_core.observations import ObservationStore
from wumpus_core.parser import parse_level_str

LVL = """
.P..
....
W...
...G
"""


def test_starts_empty():
    obs = ObservationStore()
    for b in (obs.loaded, obs.breeze, obs.stench, obs.glitter):
        assert b == BitBoard.empty()


def test_record_flags():
    obs = ObservationStore()
    obs.record(START)
    obs.record(Position(1, 0), breeze=True, stench=True)
    obs.record(Position(3, 3), glitter=True)
    assert obs.loaded == BitBoard.from_positions([START, Position(1, 0), Position(3, 3)])
    assert obs.breeze == BitBoard.of(Position(1, 0))
    assert obs.stench == BitBoard.of(Position(1, 0))
    assert obs.glitter == BitBoard.of(Position(3, 3))


def test_sensed_subsets_of_loaded_and_growth_is_monotone():
    level = parse_level_str(LVL)
    obs = ObservationStore()
    obs.record_from(level)
    prev = obs.loaded
    for d in (Direction.DOWN, Direction.RIGHT, Direction.DOWN, Direction.RIGHT):
        level.move(d)
        obs.record_from(level)
        assert (obs.breeze | obs.stench | obs.glitter).issubset(obs.loaded)
        assert prev.issubset(obs.loaded)
        prev = obs.loaded
    assert not level.has_ended()
    # start senses the pit at (0,1); (1,0) and (2,1) sense the Wumpus at (2,0)
    assert obs.breeze.contains(START)
    assert obs.stench == BitBoard.from_positions([Position(1, 0), Position(2, 1)])


def test_exposed_boards_are_values():
    obs = ObservationStore()
    loaded = obs.loaded
    obs.record(START)
    assert loaded == BitBoard.empty()
    assert obs.loaded == BitBoard.of(START)
