# tapegrad/core/graph_utils.py
"""
Inspection helpers for a recorded tape: statistics and printable summaries.
"""

from collections import Counter
from typing import Dict

import numpy as np

from .tape import Tape


def _type_tag(record) -> str:
    return type(record.node_value).__name__


def get_graph_stats(tape: Tape) -> Dict:
    """
    Collect statistics of the recorded graph (no printing).

    fan-in of a record is its number of backward edges; fan-out is the number
    of edges pointing at it.
    """
    n_records = len(tape)
    if n_records == 0:
        return {
            'records': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'value_types': {},
            'complete': tape.is_complete,
        }

    fan_ins = [len(record.edges) for record in tape.records]
    fan_outs = [0] * n_records
    for record in tape.records:
        for edge in record.edges:
            fan_outs[edge.parent] += 1

    return {
        'records': n_records,
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'value_types': dict(Counter(_type_tag(r) for r in tape.records)),
        'complete': tape.is_complete,
    }


def print_graph_summary(tape: Tape) -> Dict:
    """Print a summary of the tape and return the statistics dict."""
    stats = get_graph_stats(tape)
    if stats['records'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "=" * 70)
    print(f"COMPUTATION GRAPH SUMMARY  (tape {tape.id})")
    print("=" * 70)
    print(f"Total records:      {stats['records']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print(f"Complete:           {stats['complete']}")
    print("=" * 70 + "\n")
    return stats


def print_computation_graph(tape: Tape, max_records: int = 20) -> None:
    """Print one line per record: handle, value and the handles it points back to."""
    print("\n" + "=" * 70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("=" * 70)

    if len(tape) == 0:
        print("Empty graph")
        return

    for i, record in enumerate(tape.records[:max_records]):
        value = record.node_value
        if isinstance(value, (float, int, np.floating, np.integer)):
            shown = f"{float(value):10.6f}"
        else:
            shown = repr(value)
        if record.edges:
            parent_info = ", ".join(f"Record{edge.parent}" for edge in record.edges)
            print(f"Record {i:4d}: ({shown}) <- [{parent_info}]")
        else:
            print(f"Record {i:4d}: ({shown}) [leaf/input]")

    if len(tape) > max_records:
        print(f"... ({len(tape) - max_records} more records)")

    print("=" * 70 + "\n")
