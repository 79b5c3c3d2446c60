# engine.py
"""
Contiguous allocation engine.

Each strategy takes the block sizes and the process requests (both in KB)
and returns a fresh AllocationResult. Block capacities are copied before a
run, so the caller's list is never modified and nothing carries over between
runs.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

FIRST_FIT = "First Fit"
BEST_FIT = "Best Fit"
WORST_FIT = "Worst Fit"
NEXT_FIT = "Next Fit"


@dataclass
class AllocationResult:
    """
    Outcome of one allocation run.

    Attributes:
        allocation (List[Optional[int]]): Block index per process, None if unallocated
        remaining_blocks (List[int]): Leftover capacity per block after the run
        allocated_count (int): Number of processes that received a block
        total_wastage (int): Sum of remaining_blocks
        utilization (float): Percentage of total block memory in use
    """
    allocation: List[Optional[int]]
    remaining_blocks: List[int]
    allocated_count: int = 0
    total_wastage: int = 0
    utilization: float = 0.0

    @property
    def unallocated_count(self) -> int:
        return len(self.allocation) - self.allocated_count

    @property
    def score(self) -> float:
        return self.allocated_count + self.utilization / 100


@dataclass
class BlockUsage:
    """How one block was shared out by an allocation run."""
    index: int
    size: int
    processes: List[int] = field(default_factory=list)
    used: int = 0

    @property
    def free(self) -> int:
        return self.size - self.used

    @property
    def used_percentage(self) -> float:
        if self.size == 0:
            return 0.0
        return self.used / self.size * 100


# -----------------------------
# Algorithms
# -----------------------------
def first_fit(blocks: Sequence[int], processes: Sequence[int]) -> AllocationResult:
    allocation: List[Optional[int]] = [None] * len(processes)
    capacity = list(blocks)

    for i, req in enumerate(processes):
        for j, free in enumerate(capacity):
            if free >= req:
                allocation[i] = j
                capacity[j] -= req
                break

    return _build_result(FIRST_FIT, allocation, capacity, blocks)


def best_fit(blocks: Sequence[int], processes: Sequence[int]) -> AllocationResult:
    allocation: List[Optional[int]] = [None] * len(processes)
    capacity = list(blocks)

    for i, req in enumerate(processes):
        best_index = None
        best_size = float('inf')

        # strict "<" keeps the leftmost block on ties
        for j, free in enumerate(capacity):
            if free >= req and free < best_size:
                best_size = free
                best_index = j

        if best_index is not None:
            allocation[i] = best_index
            capacity[best_index] -= req

    return _build_result(BEST_FIT, allocation, capacity, blocks)


def worst_fit(blocks: Sequence[int], processes: Sequence[int]) -> AllocationResult:
    allocation: List[Optional[int]] = [None] * len(processes)
    capacity = list(blocks)

    for i, req in enumerate(processes):
        worst_index = None
        worst_size = -1

        for j, free in enumerate(capacity):
            if free >= req and free > worst_size:
                worst_size = free
                worst_index = j

        if worst_index is not None:
            allocation[i] = worst_index
            capacity[worst_index] -= req

    return _build_result(WORST_FIT, allocation, capacity, blocks)


def next_fit(blocks: Sequence[int], processes: Sequence[int]) -> AllocationResult:
    """
    Next Fit resumes scanning from the block that served the previous request.

    The cursor stays on the servicing block, so that block is checked first
    for the next request. A request that fits nowhere walks one full lap and
    leaves the cursor where the lap began. That is one block past the last
    block checked, so the next request starts from the same block again.
    """
    allocation: List[Optional[int]] = [None] * len(processes)
    capacity = list(blocks)
    n = len(capacity)
    cursor = 0

    for i, req in enumerate(processes):
        for _ in range(n):
            if capacity[cursor] >= req:
                allocation[i] = cursor
                capacity[cursor] -= req
                break
            cursor = (cursor + 1) % n

    return _build_result(NEXT_FIT, allocation, capacity, blocks)


ALGORITHMS: Dict[str, Callable[[Sequence[int], Sequence[int]], AllocationResult]] = {
    FIRST_FIT: first_fit,
    BEST_FIT: best_fit,
    WORST_FIT: worst_fit,
    NEXT_FIT: next_fit,
}


# -----------------------------
# Dispatcher
# -----------------------------
def run_allocation(name: str, blocks: Sequence[int], processes: Sequence[int]) -> AllocationResult:
    try:
        algorithm = ALGORITHMS[name]
    except KeyError:
        raise ValueError(f"Unknown allocation algorithm: {name}") from None
    return algorithm(blocks, processes)


def run_all(blocks: Sequence[int], processes: Sequence[int],
            names: Optional[Iterable[str]] = None) -> Dict[str, AllocationResult]:
    """
    Run a selection of strategies over the same input.

    Results are keyed by algorithm name and always come back in the fixed
    First, Best, Worst, Next order regardless of the order of ``names``.
    """
    selected = set(ALGORITHMS) if names is None else set(names)
    unknown = selected - set(ALGORITHMS)
    if unknown:
        raise ValueError(f"Unknown allocation algorithm: {', '.join(sorted(unknown))}")
    return {
        name: run_allocation(name, blocks, processes)
        for name in ALGORITHMS
        if name in selected
    }


def compare_results(first: Optional[AllocationResult],
                    best: Optional[AllocationResult],
                    worst: Optional[AllocationResult],
                    next_: Optional[AllocationResult]) -> Optional[str]:
    """
    Return the name of the highest scoring result.

    Score is allocated_count + utilization / 100. A result passed as None was
    not run and is skipped. Ties go to the earlier algorithm in the
    First, Best, Worst, Next order. Returns None when nothing was run.
    """
    candidates = [
        (FIRST_FIT, first),
        (BEST_FIT, best),
        (WORST_FIT, worst),
        (NEXT_FIT, next_),
    ]

    winner = None
    winner_score = None
    for name, result in candidates:
        if result is None:
            continue
        if winner_score is None or result.score > winner_score:
            winner = name
            winner_score = result.score
    return winner


# -----------------------------
# Helpers
# -----------------------------
def _build_result(name: str, allocation: List[Optional[int]], remaining: List[int],
                  original: Sequence[int]) -> AllocationResult:
    allocated_count = sum(1 for block in allocation if block is not None)
    total_wastage = sum(remaining)
    total_memory = sum(original)

    if total_memory == 0:
        utilization = 0.0
    else:
        utilization = (total_memory - total_wastage) / total_memory * 100

    logger.debug("%s: allocated %d/%d processes, wastage=%d, utilization=%.2f",
                 name, allocated_count, len(allocation), total_wastage, utilization)

    return AllocationResult(
        allocation=allocation,
        remaining_blocks=remaining,
        allocated_count=allocated_count,
        total_wastage=total_wastage,
        utilization=utilization,
    )


def block_usage(blocks: Sequence[int], processes: Sequence[int],
                result: AllocationResult) -> List[BlockUsage]:
    """Break a result down per block, listing the processes each block holds."""
    usage = [BlockUsage(index=i, size=size) for i, size in enumerate(blocks)]
    for proc_index, block_index in enumerate(result.allocation):
        if block_index is None:
            continue
        usage[block_index].processes.append(proc_index)
        usage[block_index].used += processes[proc_index]
    return usage
