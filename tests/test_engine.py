import unittest
from unittest import mock

from engine import (
    ALGORITHMS,
    AllocationResult,
    best_fit,
    block_usage,
    compare_results,
    first_fit,
    next_fit,
    run_all,
    run_allocation,
    worst_fit,
)

BLOCKS = [100, 500, 200, 300, 600]
PROCESSES = [212, 417, 112, 426]


class FitStrategyTests(unittest.TestCase):
    def test_first_fit_reference_input(self) -> None:
        result = first_fit(BLOCKS, PROCESSES)
        self.assertEqual(result.allocation, [1, 4, 1, None])
        self.assertEqual(result.remaining_blocks, [100, 176, 200, 300, 183])
        self.assertEqual(result.allocated_count, 3)
        self.assertEqual(result.total_wastage, 959)
        self.assertAlmostEqual(result.utilization, 741 / 1700 * 100)

    def test_best_fit_reference_input(self) -> None:
        result = best_fit(BLOCKS, PROCESSES)
        self.assertEqual(result.allocation, [3, 1, 2, 4])
        self.assertEqual(result.remaining_blocks, [100, 83, 88, 88, 174])
        self.assertEqual(result.allocated_count, 4)
        self.assertEqual(result.total_wastage, 533)
        self.assertAlmostEqual(result.utilization, 1167 / 1700 * 100)

    def test_worst_fit_reference_input(self) -> None:
        result = worst_fit(BLOCKS, PROCESSES)
        self.assertEqual(result.allocation, [4, 1, 4, None])
        self.assertEqual(result.remaining_blocks, [100, 83, 200, 300, 276])
        self.assertEqual(result.allocated_count, 3)
        self.assertEqual(result.total_wastage, 959)

    def test_next_fit_reference_input(self) -> None:
        result = next_fit(BLOCKS, PROCESSES)
        self.assertEqual(result.allocation, [1, 4, 4, None])
        self.assertEqual(result.remaining_blocks, [100, 288, 200, 300, 71])
        self.assertEqual(result.allocated_count, 3)

    def test_next_fit_resumes_at_servicing_block(self) -> None:
        blocks = [50, 100, 10]
        processes = [60, 30, 200, 5]
        # First Fit goes back to block 0 for the small requests
        self.assertEqual(first_fit(blocks, processes).allocation, [1, 0, None, 0])
        # Next Fit keeps probing block 1 first, even after a failed lap
        self.assertEqual(next_fit(blocks, processes).allocation, [1, 1, None, 1])

    def test_next_fit_failed_lap_returns_cursor_to_start(self) -> None:
        # the failed lap for 100 ends back on block 1, so 8 lands in block 2
        # rather than in block 0, the last block checked
        result = next_fit([10, 50, 40], [45, 100, 8])
        self.assertEqual(result.allocation, [1, None, 2])
        self.assertEqual(result.remaining_blocks, [10, 5, 32])

    def test_next_fit_wraps_around(self) -> None:
        result = next_fit([30, 10, 50], [40, 25])
        self.assertEqual(result.allocation, [2, 0])
        self.assertEqual(result.remaining_blocks, [5, 10, 10])

    def test_ties_resolve_to_lowest_index(self) -> None:
        self.assertEqual(best_fit([200, 100, 100], [50]).allocation, [1])
        self.assertEqual(worst_fit([100, 200, 200], [50]).allocation, [1])

    def test_input_blocks_not_modified(self) -> None:
        blocks = list(BLOCKS)
        for algorithm in ALGORITHMS.values():
            algorithm(blocks, PROCESSES)
        self.assertEqual(blocks, BLOCKS)

    def test_empty_processes(self) -> None:
        for algorithm in ALGORITHMS.values():
            result = algorithm([100, 200], [])
            self.assertEqual(result.allocation, [])
            self.assertEqual(result.allocated_count, 0)
            self.assertEqual(result.remaining_blocks, [100, 200])
            self.assertEqual(result.utilization, 0.0)

    def test_empty_blocks(self) -> None:
        for algorithm in ALGORITHMS.values():
            result = algorithm([], [10, 20])
            self.assertEqual(result.allocation, [None, None])
            self.assertEqual(result.allocated_count, 0)
            self.assertEqual(result.total_wastage, 0)
            self.assertEqual(result.utilization, 0.0)

    def test_conservation_and_no_over_allocation(self) -> None:
        cases = [
            (BLOCKS, PROCESSES),
            ([10, 20, 30], [5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5]),
            ([400, 50, 50, 400], [100, 350, 60, 40, 300]),
            ([1], [2, 1, 1]),
        ]
        for blocks, processes in cases:
            for name, algorithm in ALGORITHMS.items():
                with self.subTest(algorithm=name, blocks=blocks):
                    result = algorithm(blocks, processes)
                    allocated = sum(
                        size for size, block in zip(processes, result.allocation) if block is not None
                    )
                    self.assertEqual(sum(result.remaining_blocks) + allocated, sum(blocks))
                    for usage in block_usage(blocks, processes, result):
                        self.assertLessEqual(usage.used, usage.size)
                        self.assertGreaterEqual(result.remaining_blocks[usage.index], 0)
                    self.assertGreaterEqual(result.utilization, 0.0)
                    self.assertLessEqual(result.utilization, 100.0)


class CompareResultsTests(unittest.TestCase):
    def test_best_fit_wins_reference_input(self) -> None:
        results = run_all(BLOCKS, PROCESSES)
        winner = compare_results(
            results["First Fit"], results["Best Fit"], results["Worst Fit"], results["Next Fit"]
        )
        self.assertEqual(winner, "Best Fit")

    def test_tie_goes_to_earliest(self) -> None:
        result = first_fit([100], [50])
        self.assertEqual(compare_results(result, result, result, result), "First Fit")
        self.assertEqual(compare_results(None, result, result, None), "Best Fit")

    def test_skips_results_not_run(self) -> None:
        result = worst_fit(BLOCKS, PROCESSES)
        self.assertEqual(compare_results(None, None, result, None), "Worst Fit")
        self.assertIsNone(compare_results(None, None, None, None))

    def test_score(self) -> None:
        result = AllocationResult([0, None], [50], allocated_count=1, total_wastage=50, utilization=50.0)
        self.assertEqual(result.score, 1.5)
        self.assertEqual(result.unallocated_count, 1)


class DispatchTests(unittest.TestCase):
    def test_run_allocation_by_name(self) -> None:
        self.assertEqual(run_allocation("Worst Fit", BLOCKS, PROCESSES), worst_fit(BLOCKS, PROCESSES))

    def test_unknown_algorithm(self) -> None:
        with self.assertRaises(ValueError):
            run_allocation("Quick Fit", BLOCKS, PROCESSES)
        with self.assertRaises(ValueError):
            run_all(BLOCKS, PROCESSES, ["First Fit", "Quick Fit"])

    def test_run_all_dispatches_by_name(self) -> None:
        with mock.patch("engine.run_allocation", wraps=run_allocation) as dispatch:
            run_all(BLOCKS, PROCESSES, ["Best Fit", "Next Fit"])
        self.assertEqual(
            [c.args[0] for c in dispatch.call_args_list], ["Best Fit", "Next Fit"]
        )

    def test_run_all_keeps_fixed_order(self) -> None:
        results = run_all(BLOCKS, PROCESSES, ["Next Fit", "First Fit"])
        self.assertEqual(list(results), ["First Fit", "Next Fit"])

    def test_block_usage(self) -> None:
        usage = block_usage(BLOCKS, PROCESSES, first_fit(BLOCKS, PROCESSES))
        self.assertEqual(usage[1].processes, [0, 2])
        self.assertEqual(usage[1].used, 324)
        self.assertEqual(usage[1].free, 176)
        self.assertEqual(usage[0].processes, [])
        self.assertEqual(usage[0].used_percentage, 0.0)
        self.assertAlmostEqual(usage[4].used_percentage, 417 / 600 * 100)


if __name__ == "__main__":
    unittest.main()
