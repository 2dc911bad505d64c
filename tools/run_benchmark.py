#!/usr/bin/env python3
"""
Engine Benchmark Runner

Times perft (move generation) and the tactical suite (search) at several
depths to establish baseline performance figures.

Usage:
    python tools/run_benchmark.py [--depths 1,2,3] [--perft-depth 3] [--seed 42]
"""

import argparse
import logging
import random
import sys
import time
from pathlib import Path

from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).parent.parent))

from chess_duel.board.position import Position
from chess_duel.evaluation.classical import ClassicalEvaluator
from chess_duel.utils.testing import TACTICAL_POSITIONS, evaluate_position, perft


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def run_perft(max_depth: int):
    """Print perft counts and speed from the starting position."""
    print("=" * 80)
    print("PERFT - starting position")
    print("=" * 80)

    position = Position.initial()
    for depth in range(1, max_depth + 1):
        start_time = time.time()
        nodes = perft(position, depth)
        elapsed = time.time() - start_time
        nodes_per_sec = nodes / elapsed if elapsed > 0 else 0
        print(f"  depth {depth}: {nodes:>10,} nodes  {format_time(elapsed):>8}  {nodes_per_sec:>10,.0f} nodes/sec")


def run_benchmark(depths: list[int], seed=None):
    """
    Run the tactical suite at multiple depths.

    Args:
        depths: List of depths to test
        seed: Seed for the root move shuffle
    """
    evaluator = ClassicalEvaluator()
    all_results = []

    for depth in depths:
        rng = random.Random(seed)
        start_time = time.time()

        results = [
            evaluate_position(position, depth, evaluator, rng)
            for position in tqdm(TACTICAL_POSITIONS, desc=f"depth {depth}", unit="pos")
        ]

        total_time = time.time() - start_time
        total_nodes = sum(r.nodes_searched for r in results)
        correct = sum(1 for r in results if r.correct)

        all_results.append({
            'depth': depth,
            'score': correct,
            'total': len(results),
            'total_time': total_time,
            'nodes_per_sec': total_nodes / total_time if total_time > 0 else 0,
            'failed': [r for r in results if not r.correct],
        })

    print("\n" + "=" * 80)
    print("TACTICAL SUITE SUMMARY")
    print("=" * 80)
    print(f"{'Depth':<8} {'Correct':<12} {'Time':<12} {'Nodes/sec':<15}")
    print("-" * 80)

    for r in all_results:
        print(f"{r['depth']:<8} {r['score']}/{r['total']:<10} {format_time(r['total_time']):<12} {r['nodes_per_sec']:>12,.0f}")
        for failed in r['failed']:
            print(f"         {failed.position.id}: expected {failed.position.best_moves}, got {failed.found_move}")

    print("=" * 80)
    return all_results


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark move generation and search"
    )
    parser.add_argument(
        "--depths",
        type=str,
        default="1,2,3",
        help="Comma-separated list of search depths to test (default: 1,2,3)"
    )
    parser.add_argument(
        "--perft-depth",
        type=int,
        default=3,
        help="Maximum perft depth from the starting position (default: 3)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the root move shuffle"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every position result"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S',
    )

    try:
        depths = [int(d.strip()) for d in args.depths.split(",")]
    except ValueError:
        print("Error: depths must be comma-separated integers")
        sys.exit(1)

    try:
        run_perft(args.perft_depth)
        run_benchmark(depths, seed=args.seed)
    except KeyboardInterrupt:
        print("\n\nBenchmark interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
