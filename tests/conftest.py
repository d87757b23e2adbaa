import random

import pytest

from tsp_evo.operators.base import Point


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def square():
    return (Point(0, 0.0, 0.0), Point(1, 1.0, 0.0), Point(2, 1.0, 1.0), Point(3, 0.0, 1.0))


@pytest.fixture
def cities():
    gen = random.Random(99)
    return tuple(Point(i, gen.uniform(0, 100), gen.uniform(0, 100)) for i in range(15))


SQUARE_TSP = """NAME: square4
TYPE: TSP
COMMENT: four corners
DIMENSION: 4
EDGE_WEIGHT_TYPE: EUC_2D
NODE_COORD_SECTION
1 0 0
2 10 0
3 10 10
4 0 10
EOF
"""


@pytest.fixture
def square_tsp(tmp_path):
    path = tmp_path / "square4.tsp"
    path.write_text(SQUARE_TSP)
    return path
