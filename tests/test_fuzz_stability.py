import copy
import random
import string
from datetime import timezone
from typing import Any

from difflogpack.config import HeaderConfig
from difflogpack.core.values import values_equal
from difflogpack.diff import Composite, RenderOptions, diff_values, render_change

FUZZ_SEED = 20230407
PLAIN_UTC = RenderOptions(color=False, local_tz=timezone.utc)
CONFIGS = (
    HeaderConfig(),
    HeaderConfig().with_header("timestamp", True),
    HeaderConfig().with_header("timestamp", False).with_header("value", True),
)


def _random_key(rng: random.Random) -> str:
    keys = ["timestamp", "value", "name", "items", "state", "0", "1"]
    if rng.random() < 0.7:
        return rng.choice(keys)
    return "".join(rng.choice(string.ascii_lowercase) for _ in range(rng.randint(1, 6)))


def _random_scalar(rng: random.Random) -> Any:
    choice = rng.randrange(9)
    if choice == 0:
        return None
    if choice == 1:
        return bool(rng.getrandbits(1))
    if choice == 2:
        return rng.randint(-100, 100)
    if choice == 3:
        return rng.uniform(-1000, 1000)
    if choice == 4:
        return f"2023-04-07T{rng.randint(0, 23):02d}:{rng.randint(0, 59):02d}:00+00:00"
    return "".join(rng.choice(string.ascii_letters + " _-") for _ in range(rng.randint(0, 8)))


def _random_value(rng: random.Random, *, depth: int) -> Any:
    if depth <= 0:
        return _random_scalar(rng)

    choice = rng.randrange(5)
    if choice == 0:
        return _random_scalar(rng)
    if choice in {1, 2}:
        return [_random_value(rng, depth=depth - 1) for _ in range(rng.randint(0, 4))]
    return {
        _random_key(rng): _random_value(rng, depth=depth - 1)
        for _ in range(rng.randint(0, 4))
    }


def _mutate(rng: random.Random, value: Any) -> Any:
    if isinstance(value, dict) and value and rng.random() < 0.8:
        key = rng.choice(sorted(value))
        mutated = dict(value)
        mutated[key] = _mutate(rng, value[key])
        return mutated
    if isinstance(value, list) and value and rng.random() < 0.8:
        index = rng.randrange(len(value))
        mutated = list(value)
        mutated[index] = _mutate(rng, value[index])
        return mutated
    return _random_value(rng, depth=2)


def test_identical_values_never_produce_changes() -> None:
    rng = random.Random(FUZZ_SEED)

    for _ in range(300):
        value = _random_value(rng, depth=4)
        for config in CONFIGS:
            assert diff_values(value, copy.deepcopy(value), config) is None


def test_changes_detected_iff_values_differ() -> None:
    rng = random.Random(FUZZ_SEED + 1)

    for _ in range(300):
        previous = _random_value(rng, depth=4)
        next_value = _mutate(rng, previous)
        for config in CONFIGS:
            change = diff_values(previous, next_value, config)
            assert (change is not None) == (not values_equal(previous, next_value))


def test_diff_and_render_are_deterministic() -> None:
    rng = random.Random(FUZZ_SEED + 2)

    for _ in range(200):
        previous = _random_value(rng, depth=4)
        next_value = _mutate(rng, previous)
        config = rng.choice(CONFIGS)

        first = render_change(diff_values(previous, next_value, config), options=PLAIN_UTC)
        second = render_change(
            diff_values(copy.deepcopy(previous), copy.deepcopy(next_value), config),
            options=PLAIN_UTC,
        )
        assert first == second


def test_object_field_names_cover_changed_keys() -> None:
    rng = random.Random(FUZZ_SEED + 3)
    config = HeaderConfig().with_header("timestamp", False)

    for _ in range(300):
        previous = {_random_key(rng): _random_value(rng, depth=2) for _ in range(rng.randint(0, 6))}
        next_value = {_random_key(rng): _random_value(rng, depth=2) for _ in range(rng.randint(0, 6))}

        change = diff_values(previous, next_value, config)
        expected = sorted(
            key
            for key in set(previous) | set(next_value)
            if key != "timestamp"
            and (
                key not in previous
                or key not in next_value
                or not values_equal(previous[key], next_value[key])
            )
        )

        if change is None:
            assert expected == []
            continue
        assert isinstance(change, Composite)
        assert [field.name for field in change.fields] == expected
