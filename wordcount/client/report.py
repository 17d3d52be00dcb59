"""Report formatting for finished word count runs."""

import sys
from typing import List, Optional, TextIO

from wordcount.coordinator.engine import WordCountResult


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds / 60)
    seconds = seconds % 60
    return f"{minutes}m {seconds:.1f}s"


def format_report(result: WordCountResult) -> List[str]:
    """One 'word: count' line per word, ascending by word."""
    return [f"{word}: {count}" for word, count in result.sorted_items()]


def format_summary(result: WordCountResult) -> str:
    metrics = result.metrics
    return (
        f"{metrics.num_records} records, {metrics.intermediate_pairs} words, "
        f"{metrics.distinct_words} distinct, {metrics.num_workers} worker(s), "
        f"{format_duration(metrics.total_time_seconds)}"
    )


def write_report(result: WordCountResult, sink: Optional[TextIO] = None):
    """Write the report lines to sink (stdout by default)."""
    sink = sink or sys.stdout
    for line in format_report(result):
        sink.write(line + '\n')
    sink.flush()
