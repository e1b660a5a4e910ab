import random

import mpn

BOUNDARY_VALUES = [
    0,
    1,
    -1,
    2,
    -2,
    1 << 63,
    -(1 << 63),
    (1 << 64) - 1,
    1 << 64,
    (1 << 64) + 1,
    -(1 << 64),
    -((1 << 64) + 1),
    (1 << 128) - 1,
    1 << 128,
    -(1 << 128),
    -((1 << 128) + 1),
    10**30,
    -(10**30),
]


def sample_values(seed: int, count: int, max_bits: int = 200) -> list[int]:
    rng = random.Random(seed)
    values = []
    for _ in range(count):
        value = rng.getrandbits(rng.randint(1, max_bits))
        if rng.random() < 0.5:
            value = -value
        values.append(value)
    return values


def assert_canonical(x) -> None:
    fill = mpn.NUMB_MAX if x.sign else 0
    assert len(x) == 0 or x.limbs[-1] != fill, repr(x)
