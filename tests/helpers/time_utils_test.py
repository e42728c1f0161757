from datetime import timezone

from tests.helpers.time_utils import DEFAULT_TIME_GEN, TimeGenerator


def test_time_generator_increases_with_seed() -> None:
    gen = TimeGenerator(_seed=42)

    ts1 = gen()
    ts2 = gen()
    ts3 = gen()

    assert ts1 < ts2 < ts3
    gaps = [(ts2 - ts1).total_seconds(), (ts3 - ts2).total_seconds()]
    for gap in gaps:
        assert 5 <= gap <= 60

    # Deterministic given the same seed
    gen_again = TimeGenerator(_seed=42)
    ts1_b, ts2_b, ts3_b = gen_again(), gen_again(), gen_again()
    gaps_b = [(ts2_b - ts1_b).total_seconds(), (ts3_b - ts2_b).total_seconds()]
    assert gaps == gaps_b


def test_time_generator_is_utc() -> None:
    assert TimeGenerator(_seed=1)().tzinfo == timezone.utc


def test_generators_do_not_share_random_state() -> None:
    first = TimeGenerator()
    second = TimeGenerator()

    first_readings = [first() for _ in range(3)]
    second_readings = [second() for _ in range(3)]

    assert first._rng is not second._rng
    assert first_readings == second_readings


def test_default_generator_is_reset_between_tests() -> None:
    # After the autouse reset, we should start from the same baseline.
    first = DEFAULT_TIME_GEN()
    DEFAULT_TIME_GEN.reset()
    assert DEFAULT_TIME_GEN() == first
