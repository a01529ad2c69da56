import numpy as np
import pytest

from hull2d import Hull2D
from hull2d import HullConfig


@pytest.fixture
def stack():
    return Hull2D().create_stack()


@pytest.fixture
def make_hull(stack):
    """Build a hull from points and compute it with the shared scratch stack."""

    def _make(points, config: HullConfig | None = None) -> Hull2D:
        hull = Hull2D(config)
        hull.add_points(points)
        scratch = stack if config is None else hull.create_stack()
        assert hull.compute_hull(scratch)
        return hull

    return _make


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
