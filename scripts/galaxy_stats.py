#!/usr/bin/env python3
# /// script
# requires-python = ">=3.10"
# dependencies = ["numpy", "star-trip"]
# ///
"""
Galaxy Density Statistics for Star Trip

Generates a batch of seeded galaxies at a given difficulty and reports how
many enemies and other entities a system holds on average, and how many
systems are empty of enemies. Useful when tuning DIFFICULTY.

Usage:
    python scripts/galaxy_stats.py --difficulty 100 --galaxies 50
"""

import argparse
import random

import numpy as np

from star_trip.constants import SYSTEMS
from star_trip.generation import density_factor, generate_galaxy


def system_counts(seed: int, difficulty: int) -> np.ndarray:
    """Per-system (enemies, others) counts, shape (SYSTEMS, SYSTEMS, 2)."""
    galaxy = generate_galaxy(random.Random(seed), difficulty)
    counts = np.zeros((SYSTEMS, SYSTEMS, 2), dtype=np.int64)
    for system_y in range(SYSTEMS):
        for system_x in range(SYSTEMS):
            for cell in galaxy.system_cells(system_x, system_y):
                if cell is not None:
                    counts[system_y, system_x, 0 if cell.is_enemy else 1] += 1
    return counts


def main():
    parser = argparse.ArgumentParser(description="Summarise generated galaxy density")
    parser.add_argument("--difficulty", type=int, default=100, help="Difficulty (default: 100)")
    parser.add_argument("--galaxies", type=int, default=20, help="Galaxies to generate (default: 20)")
    parser.add_argument("--seed", type=int, default=0, help="First seed (default: 0)")
    args = parser.parse_args()

    samples = np.stack([
        system_counts(args.seed + i, args.difficulty) for i in range(args.galaxies)
    ])
    enemies = samples[..., 0]
    others = samples[..., 1]

    print(f"Difficulty {args.difficulty} (density factor {density_factor(args.difficulty):.3f})")
    print(f"Galaxies sampled: {args.galaxies}")
    print("=" * 50)
    print(f"Enemies per system:  mean {enemies.mean():.2f}  std {enemies.std():.2f}  max {enemies.max()}")
    print(f"Others per system:   mean {others.mean():.2f}  std {others.std():.2f}  max {others.max()}")
    print(f"Enemies per galaxy:  mean {enemies.sum(axis=(1, 2)).mean():.1f}")
    print(f"Systems with no enemies: {(enemies == 0).mean() * 100:.1f}%")


if __name__ == "__main__":
    main()
