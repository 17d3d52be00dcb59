#!/usr/bin/env python3
"""
Generate plots from benchmark results.
"""

import json
import sys
from pathlib import Path
from collections import defaultdict

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

# Configuration
PLOTS_DIR = Path("benchmark_results/plots")


def load_results(json_file):
    """Load benchmark results from JSON file."""
    with open(json_file, 'r') as f:
        return json.load(f)


def aggregate_runs(results):
    """
    Aggregate multiple runs of the same benchmark.
    Returns dict: benchmark_name -> {avg_runtime, std_runtime, config, ...}
    """
    by_benchmark = defaultdict(list)

    for r in results:
        if r['success']:  # Only include successful runs
            by_benchmark[r['benchmark_name']].append(r)

    aggregated = {}
    for name, runs in by_benchmark.items():
        runtimes = [r['total_runtime_seconds'] for r in runs]
        throughputs = [r['records_per_second'] for r in runs]
        first = runs[0]

        aggregated[name] = {
            'benchmark_name': name,
            'description': first['description'],
            'num_workers': first['num_workers'],
            'num_shards': first['num_shards'],
            'avg_runtime': float(np.mean(runtimes)),
            'std_runtime': float(np.std(runtimes)),
            'min_runtime': float(np.min(runtimes)),
            'max_runtime': float(np.max(runtimes)),
            'avg_throughput': float(np.mean(throughputs)),
            'num_runs': len(runs)
        }

    return aggregated


def _errorbar_plot(points, xlabel, title, output_file, marker, color):
    points.sort()
    xs, runtimes, stds = zip(*points)

    plt.figure(figsize=(10, 6))
    plt.errorbar(xs, runtimes, yerr=stds, marker=marker, capsize=5,
                 linewidth=2, markersize=8, color=color)
    plt.xlabel(xlabel, fontsize=12)
    plt.ylabel('Runtime (seconds)', fontsize=12)
    plt.title(title, fontsize=14, fontweight='bold')
    plt.xticks(xs)
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_file, dpi=300, bbox_inches='tight')
    print(f"✓ Saved: {output_file}")
    plt.close()


def plot_worker_scaling(aggregated, output_file):
    """Plot runtime vs number of map workers."""
    data = [(v['num_workers'], v['avg_runtime'], v['std_runtime'])
            for k, v in aggregated.items()
            if k.startswith('workers_')]

    if not data:
        print("⚠️  No worker scaling data found")
        return

    _errorbar_plot(data, 'Number of Map Workers',
                   'Word Count: Worker Scaling (single lock)',
                   output_file, 's', 'orangered')


def plot_shard_scaling(aggregated, output_file):
    """Plot runtime vs number of lock shards."""
    data = [(v['num_shards'], v['avg_runtime'], v['std_runtime'])
            for k, v in aggregated.items()
            if k.startswith('shards_')]

    if not data:
        print("⚠️  No shard scaling data found")
        return

    _errorbar_plot(data, 'Number of Lock Shards',
                   'Word Count: Aggregate Lock Sharding (8 workers)',
                   output_file, '^', 'green')


def plot_speedup(aggregated, output_file):
    """Plot speedup for worker scaling."""
    data = [(v['num_workers'], v['avg_runtime'])
            for k, v in aggregated.items()
            if k.startswith('workers_')]

    if len(data) < 2:
        print("⚠️  Insufficient data for speedup plot")
        return

    data.sort()
    workers, runtimes = zip(*data)

    baseline = runtimes[0]
    speedups = np.array([baseline / rt if rt > 0 else 0.0 for rt in runtimes])
    ideal = np.array(workers, dtype=float) / workers[0]

    plt.figure(figsize=(10, 6))
    plt.plot(workers, speedups, marker='o', linewidth=2, markersize=8,
             label='Actual Speedup', color='blue')
    plt.plot(workers, ideal, linestyle='--', linewidth=2,
             label='Ideal (Linear) Speedup', color='gray', alpha=0.7)
    plt.xlabel('Number of Map Workers', fontsize=12)
    plt.ylabel('Speedup', fontsize=12)
    plt.title('Word Count Speedup vs Ideal Linear Speedup',
              fontsize=14, fontweight='bold')
    plt.xticks(workers)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_file, dpi=300, bbox_inches='tight')
    print(f"✓ Saved: {output_file}")
    plt.close()


def main():
    if len(sys.argv) < 2:
        print("Usage: python3 plot_results.py <benchmark_results.json>")
        sys.exit(1)

    results = load_results(sys.argv[1])
    aggregated = aggregate_runs(results)

    PLOTS_DIR.mkdir(parents=True, exist_ok=True)
    plot_worker_scaling(aggregated, PLOTS_DIR / "worker_scaling.png")
    plot_shard_scaling(aggregated, PLOTS_DIR / "shard_scaling.png")
    plot_speedup(aggregated, PLOTS_DIR / "speedup.png")


if __name__ == "__main__":
    main()
