"""Thread safety tests for transforms and operation dispatch.

Transforms share no mutable state, so concurrent calls on independent (or
shared, read-only) rasters must produce exactly the sequential results.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np
import pytest

from rasterlab import Raster, apply_operation
from rasterlab.filters import FilterPipeline
from rasterlab.operations import OPERATION_TABLE


@pytest.fixture
def test_grids():
    """Create a list of distinct test grids."""
    rng = np.random.default_rng(7)
    return [Raster(rng.integers(0, 256, size=(24, 32), dtype=np.uint8)) for _ in range(10)]


class TestConcurrentDispatch:
    @pytest.mark.parametrize("operation_id", sorted(OPERATION_TABLE) + ["inpainting"])
    def test_operations_concurrent(self, test_grids, operation_id):
        expected = [apply_operation(grid, operation_id) for grid in test_grids]
        errors = []

        def process(index):
            try:
                return index, apply_operation(test_grids[index], operation_id)
            except Exception as e:
                errors.append(e)
                return index, None

        results = {}
        with ThreadPoolExecutor(max_workers=4) as executor:
            futures = [executor.submit(process, i) for i in range(len(test_grids))]
            for f in as_completed(futures):
                index, result = f.result()
                results[index] = result

        assert len(errors) == 0, f"Errors during concurrent execution: {errors}"
        assert all(results[i] == expected[i] for i in range(len(test_grids)))

    def test_shared_input(self, test_grids):
        """Many threads reading the same raster leave it untouched."""
        grid = test_grids[0]
        before = grid.copy()
        pipeline = FilterPipeline.parse("blur 2 | sharpen | histogram | wrap_pad 3")
        expected = pipeline(grid)

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: pipeline(grid), range(16)))

        assert all(r == expected for r in results)
        assert grid == before
