"""
Tests for procedural galaxy generation.

Run with: python -m pytest tests/test_generation.py -v
"""

import math
import random

import pytest

from star_trip.constants import SYSTEMS
from star_trip.generation import (
    density_factor,
    generate_galaxy,
    random_position,
    spawn,
)


def system_totals(galaxy, system_x, system_y):
    cells = [cell for cell in galaxy.system_cells(system_x, system_y) if cell is not None]
    enemies = sum(1 for cell in cells if cell.is_enemy)
    return enemies, len(cells) - enemies


@pytest.fixture(scope="module")
def galaxy():
    return generate_galaxy(random.Random(42))


class TestDensityFactor:

    def test_default_difficulty(self):
        assert density_factor(100) == pytest.approx(math.exp(100 / 255 - 1))

    def test_maximum_difficulty_is_one(self):
        assert density_factor(255) == pytest.approx(1.0)

    def test_increases_with_difficulty(self):
        assert density_factor(60) < density_factor(150) < density_factor(255)


class TestGenerateGalaxy:

    def test_reproducible(self):
        a = generate_galaxy(random.Random(9))
        b = generate_galaxy(random.Random(9))
        for sy in range(SYSTEMS):
            for sx in range(SYSTEMS):
                assert a.system_cells(sx, sy) == b.system_cells(sx, sy)

    def test_per_system_caps(self, galaxy):
        """Caps are drawn from [0, 9), so no system holds 9 of either class."""
        for sy in range(SYSTEMS):
            for sx in range(SYSTEMS):
                enemies, others = system_totals(galaxy, sx, sy)
                assert enemies <= 8
                assert others <= 8

    def test_galaxy_is_populated(self, galaxy):
        assert galaxy.count() > 0

    def test_enemy_stats(self, galaxy):
        for sy in range(SYSTEMS):
            for sx in range(SYSTEMS):
                for _, entity in galaxy.occupied(sx, sy):
                    if entity.is_enemy:
                        assert 20 <= entity.ship.energy < 100
                        assert 1 <= entity.ship.torpedoes < 5

    def test_denser_at_higher_difficulty(self):
        easy = sum(generate_galaxy(random.Random(s), 60).count() for s in range(5))
        hard = sum(generate_galaxy(random.Random(s), 255).count() for s in range(5))
        assert hard > easy


class TestSpawn:

    @pytest.mark.parametrize("seed", range(25))
    def test_spawn_cell_is_empty(self, seed):
        galaxy, position = spawn(random.Random(seed))
        assert galaxy[position] is None

    def test_random_position_in_bounds(self):
        rng = random.Random(0)
        for _ in range(200):
            p = random_position(rng)
            assert all(0 <= c < 10 for c in p)
