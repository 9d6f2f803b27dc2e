"""Shared fixtures for unit tests."""

import numpy as np
import pytest

from page_clusterer.config.settings import Settings


class FixedOrderRng:
    """Random source whose permutation is fixed by the test."""

    def __init__(self, order):
        self.order = np.asarray(order)

    def permutation(self, n):
        assert n == len(self.order)
        return self.order.copy()


@pytest.fixture
def separated_matrix():
    """Two well-separated groups: rows {0, 1} and {2, 3}."""
    return np.array([[0.0, 0.0], [0.0, 1.0], [10.0, 10.0], [10.0, 11.0]])


@pytest.fixture
def fixed_order_rng():
    return FixedOrderRng


@pytest.fixture
def settings_factory(tmp_path):
    """Builds Settings with output directories under tmp_path."""
    def factory(**overrides):
        config = {
            "fetching": {"urls": [], "timeout": 5},
            "preprocessing": {"min_word_length": 1},
            "vectorization": {"n_features": 1024},
            "clustering": {"n_clusters": 2, "deterministic": True, "max_iter": 100},
            "output": {
                "reports_dir": str(tmp_path / "reports"),
                "logs_dir": str(tmp_path / "logs"),
            },
        }
        for section, values in overrides.items():
            config.setdefault(section, {}).update(values)
        return Settings(config)

    return factory
