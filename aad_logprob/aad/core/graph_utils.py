"""
Graph inspection helpers.
Print and summarise the structure of a recorded tape.
"""

import numpy as np
from typing import Dict, Optional
from collections import Counter

from .tape import Tape, get_tape


def get_graph_stats(tape: Optional[Tape] = None) -> Dict:
    """
    Collect graph statistics without printing.

    Returns:
        dict with node/edge counts, fan-in/fan-out and per-operation counts
    """
    tape = tape if tape is not None else get_tape()
    if not tape.nodes:
        return {
            'nodes': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    n_nodes = len(tape.nodes)
    fan_ins = [len(node.operands) for node in tape.nodes]
    fan_outs = [0] * n_nodes
    for node in tape.nodes:
        for p in node.operands:
            fan_outs[p] += 1

    op_counter = Counter(node.op_tag.value for node in tape.nodes)

    return {
        'nodes': n_nodes,
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def print_graph_summary(tape: Optional[Tape] = None) -> Dict:
    """
    Print a summary of the computation graph.

    Returns:
        the statistics dictionary from get_graph_stats
    """
    stats = get_graph_stats(tape)
    if stats['nodes'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / stats['nodes']
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")
    print("="*70 + "\n")
    return stats


def print_computation_graph(tape: Optional[Tape] = None, max_nodes: int = 20) -> None:
    """
    Print one line per node: index, operation, forward value and operands.

    Args:
        tape: tape to print (active tape by default)
        max_nodes: print at most this many nodes
    """
    tape = tape if tape is not None else get_tape()
    print("\n" + "="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    if not tape.nodes:
        print("Empty graph")
        return

    for node in tape.nodes[:max_nodes]:
        out_val = tape.arena.value(node.index)
        tag = node.op_tag.value
        if node.operands:
            parent_info = ", ".join(f"Node{p}" for p in node.operands)
            print(f"Node {node.index:4d}: {tag:12s} ({out_val:10.6f}) <- [{parent_info}]")
        else:
            print(f"Node {node.index:4d}: {tag:12s} ({out_val:10.6f}) [leaf/input]")

    if len(tape.nodes) > max_nodes:
        print(f"... ({len(tape.nodes) - max_nodes} more nodes)")

    print("="*70 + "\n")
