import random

import pytest

from tsp_evo.data import generate_points, load_instance

SQUARE_TOUR = """NAME: square4.opt.tour
TYPE: TOUR
DIMENSION: 4
TOUR_SECTION
1
2
3
4
-1
EOF
"""

GEO_TSP = """NAME: geo3
TYPE: TSP
DIMENSION: 3
EDGE_WEIGHT_TYPE: GEO
NODE_COORD_SECTION
1 38.24 20.42
2 39.57 26.15
3 40.56 25.32
EOF
"""


def test_generate_points_stays_inside_margin():
    points = generate_points(50, 800, 600, 20, random.Random(1))
    assert [p.id for p in points] == list(range(50))
    for p in points:
        assert 20 <= p.x < 780
        assert 20 <= p.y < 580


def test_load_instance_reads_coordinates(square_tsp):
    instance = load_instance(square_tsp)
    assert instance.name == "square4"
    assert [p.id for p in instance.points] == [1, 2, 3, 4]
    assert (instance.points[2].x, instance.points[2].y) == (10.0, 10.0)
    assert instance.optimum is None


def test_load_instance_computes_optimum_from_tour_file(square_tsp):
    square_tsp.with_name("square4.opt.tour").write_text(SQUARE_TOUR)
    instance = load_instance(square_tsp)
    assert instance.optimum == pytest.approx(40.0)


def test_load_instance_rejects_geographic_coordinates(tmp_path):
    path = tmp_path / "geo3.tsp"
    path.write_text(GEO_TSP)
    with pytest.raises(ValueError, match="GEO"):
        load_instance(path)
