"""
Timing and space measurements for HashMap operations.

Every run uses a map of fixed capacity, so larger inputs show the chains
lengthening as the load factor climbs. Results are written as CSV rows.
"""

import csv
import logging
import random
import statistics
import sys
import time
from typing import Callable, Dict, List, Tuple

from .datastructures import HashMap

logger = logging.getLogger(__name__)

Pairs = List[Tuple[str, str]]

# ----------------------------
# Helper Functions
# ----------------------------

def generate_random_pairs(size: int) -> Pairs:
    """Generate a list of random key-value pairs."""
    return [(f"k{random.randint(0, size * 10)}", str(random.randint(0, 1000000))) for _ in range(size)]


def measure_operation_time(operation: Callable[[Pairs, int], HashMap], input_size: int,
                           capacity: int, iterations: int = 5) -> Tuple[float, float]:
    """Run the operation multiple times and return average + std deviation (ms)."""
    times = []
    for _ in range(iterations):
        data = generate_random_pairs(input_size)
        start = time.perf_counter()
        operation(data, capacity)
        end = time.perf_counter()
        times.append((end - start) * 1000)  # convert to milliseconds

    avg_time = statistics.mean(times)
    std_dev = statistics.stdev(times) if len(times) > 1 else 0.0
    return avg_time, std_dev


def measure_space_efficiency(operation: Callable[[Pairs, int], HashMap], input_size: int,
                             capacity: int, iterations: int = 3) -> float:
    """Return average memory held by the map, its buckets, keys and values (bytes)."""
    sizes = []
    for _ in range(iterations):
        data = generate_random_pairs(input_size)
        hm = operation(data, capacity)
        total_size = sys.getsizeof(hm)
        for _, bucket in hm.slots():
            total_size += sys.getsizeof(bucket)
            for entry in bucket.entries():
                total_size += sys.getsizeof(entry)
                total_size += sys.getsizeof(entry.key)
                total_size += sys.getsizeof(entry.value)
        sizes.append(total_size)
    return statistics.mean(sizes)

# ----------------------------
# Operations to Benchmark
# ----------------------------

def _filled(data: Pairs, capacity: int) -> HashMap:
    hm = HashMap(capacity)
    for k, v in data:
        hm.put(k, v)
    return hm


def bench_put(data: Pairs, capacity: int) -> HashMap:
    return _filled(data, capacity)


def bench_get(data: Pairs, capacity: int) -> HashMap:
    hm = _filled(data, capacity)
    for k, _ in data:
        hm.get(k)
    return hm


def bench_contains(data: Pairs, capacity: int) -> HashMap:
    hm = _filled(data, capacity)
    for k, _ in data:
        hm.contains(k)
    return hm


def bench_remove(data: Pairs, capacity: int) -> HashMap:
    hm = _filled(data, capacity)
    for k, _ in data[: len(data) // 2]:
        hm.remove(k)
    return hm


def bench_clear(data: Pairs, capacity: int) -> HashMap:
    hm = _filled(data, capacity)
    hm.clear()
    return hm


OPERATIONS: Dict[str, Callable[[Pairs, int], HashMap]] = {
    "put": bench_put,
    "get": bench_get,
    "contains": bench_contains,
    "remove": bench_remove,
    "clear": bench_clear,
}

# ----------------------------
# Benchmark Runner
# ----------------------------

def run_benchmarks(output_file: str, base_input: int = 100, steps: int = 8,
                   capacity: int = 1024, iterations: int = 5) -> int:
    """Run exponential performance tests for HashMap operations.

    Returns the number of result rows written.
    """
    input_sizes = [base_input * (2 ** i) for i in range(steps)]
    rows = 0

    with open(output_file, "w", newline="") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow([
            "Input Size",
            "Capacity",
            "Operation",
            "Average Time (ms)",
            "Standard Deviation (ms)",
            "Average Space (bytes)"
        ])

        for op_name, op_func in OPERATIONS.items():
            for size in input_sizes:
                avg_time, std_time = measure_operation_time(op_func, size, capacity, iterations)
                avg_space = measure_space_efficiency(op_func, size, capacity, max(1, iterations // 2))
                writer.writerow([size, capacity, op_name, f"{avg_time:.3f}", f"{std_time:.3f}", f"{avg_space:.0f}"])
                rows += 1
                logger.info("%-8s | size %-8d | avg %.3f ms | std %.3f ms | space %.0f bytes",
                            op_name, size, avg_time, std_time, avg_space)

    logger.info("benchmark results saved to %s", output_file)
    return rows
