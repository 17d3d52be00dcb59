#!/usr/bin/env python3
"""
Automated benchmarking script for the word count engine.
Runs the engine across worker and shard counts and collects run metrics.
"""

import argparse
import csv
import json
import sys
from datetime import datetime
from pathlib import Path

from wordcount.common.config import EngineConfig
from wordcount.common.errors import WordCountError
from wordcount.coordinator.engine import Coordinator
from wordcount.client.records import SAMPLE_CORPUS, load_records

# Configuration
RESULTS_DIR = Path("benchmark_results")

# Benchmark configurations
BENCHMARKS = [
    # Experiment 1: Worker scaling (single lock)
    {"name": "workers_1", "workers": 1, "shards": 1, "description": "1 worker, single lock"},
    {"name": "workers_2", "workers": 2, "shards": 1, "description": "2 workers, single lock"},
    {"name": "workers_4", "workers": 4, "shards": 1, "description": "4 workers, single lock"},
    {"name": "workers_8", "workers": 8, "shards": 1, "description": "8 workers, single lock"},

    # Experiment 2: Shard scaling (fixed workers)
    {"name": "shards_1", "workers": 8, "shards": 1, "description": "8 workers, 1 shard"},
    {"name": "shards_4", "workers": 8, "shards": 4, "description": "8 workers, 4 shards"},
    {"name": "shards_16", "workers": 8, "shards": 16, "description": "8 workers, 16 shards"},
]


def build_corpus(input_path, replications):
    """Load the base records and replicate them to the requested size."""
    base = load_records(input_path) if input_path else SAMPLE_CORPUS
    return tuple(base) * replications


def run_benchmark(config, records, run_number=1):
    """Run one configuration once and return a result row."""
    print(f"  {config['name']} (run {run_number}): {config['description']}")

    engine_config = EngineConfig(parallelism=config['workers'], num_shards=config['shards'])
    try:
        result = Coordinator(engine_config).run(records)
    except WordCountError as e:
        print(f"  ❌ Run failed: {e}")
        return {
            'benchmark_name': config['name'],
            'description': config['description'],
            'num_workers': config['workers'],
            'num_shards': config['shards'],
            'num_records': len(records),
            'run_number': run_number,
            'success': False,
            'total_runtime_seconds': 0.0,
            'map_phase_seconds': 0.0,
            'reduce_phase_seconds': 0.0,
            'records_per_second': 0.0,
            'peak_memory_mb': 0.0,
        }

    metrics = result.metrics
    print(f"  ✓ {metrics.total_time_seconds:.3f}s, {metrics.distinct_words} distinct words")
    return {
        'benchmark_name': config['name'],
        'description': config['description'],
        'num_workers': metrics.num_workers,
        'num_shards': metrics.num_shards,
        'num_records': metrics.num_records,
        'run_number': run_number,
        'success': True,
        'total_runtime_seconds': metrics.total_time_seconds,
        'map_phase_seconds': metrics.map_phase_time_seconds,
        'reduce_phase_seconds': metrics.reduce_phase_time_seconds,
        'records_per_second': metrics.records_per_second,
        'peak_memory_mb': metrics.peak_memory_bytes / (1024 * 1024),
    }


def save_results(results, timestamp):
    """Save results as JSON and CSV."""
    RESULTS_DIR.mkdir(exist_ok=True)

    json_file = RESULTS_DIR / f"benchmark_results_{timestamp}.json"
    with open(json_file, 'w') as f:
        json.dump(results, f, indent=2)
    print(f"\n✓ Results saved to: {json_file}")

    csv_file = RESULTS_DIR / f"benchmark_results_{timestamp}.csv"
    if results:
        with open(csv_file, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=list(results[0].keys()))
            writer.writeheader()
            writer.writerows(results)
        print(f"✓ Results saved to: {csv_file}")

    return json_file, csv_file


def print_summary(results):
    print(f"\n{'='*70}")
    print("BENCHMARK SUMMARY")
    print(f"{'='*70}")
    print(f"{'Benchmark':<15} {'Workers':>7} {'Shards':>6} {'Runtime':>10} {'Status':>8}")
    print(f"{'-'*70}")

    for r in results:
        print(f"{r['benchmark_name']:<15} {r['num_workers']:>7} {r['num_shards']:>6} "
              f"{r['total_runtime_seconds']:>9.3f}s {'✓' if r['success'] else '✗':>8}")

    print(f"{'='*70}")
    successful = sum(1 for r in results if r['success'])
    print(f"Total: {len(results)} runs, {successful} successful, "
          f"{len(results) - successful} failed")


def main():
    parser = argparse.ArgumentParser(description='Word count engine benchmark suite')
    parser.add_argument('--input', type=str, default=None,
                        help='Base input file (default: built-in sample corpus)')
    parser.add_argument('--replications', type=int, default=50000,
                        help='How many times to repeat the base records (default: 50000)')
    parser.add_argument('--runs', type=int, default=3,
                        help='Runs per configuration (default: 3)')
    args = parser.parse_args()

    print("=" * 70)
    print("Word Count Benchmark Suite")
    print("=" * 70)

    records = build_corpus(args.input, args.replications)
    print(f"Corpus: {len(records)} records")

    results = []
    for config in BENCHMARKS:
        for run_number in range(1, args.runs + 1):
            results.append(run_benchmark(config, records, run_number))

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    save_results(results, timestamp)
    print_summary(results)

    return 0 if all(r['success'] for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
