"""Unit tests for k-means cluster module."""

import numpy as np
import pytest

from page_clusterer.analyzer.cluster import (
    KMeansClusterer,
    assign_all,
    assign_nearest_cluster,
    cluster,
    euclidean_distance,
    make_rng,
    recompute_centroids,
    run_kmeans,
    select_initial_centroids,
)
from page_clusterer.analyzer.exceptions import EmptyClusterError, InvalidInputError


def groups_of(labels):
    """Partition of row indices, independent of label numbering."""
    groups = {}
    for idx, label in enumerate(labels):
        groups.setdefault(int(label), set()).add(idx)
    return sorted(groups.values(), key=min)


class TestSelectInitialCentroids:
    """Test cases for initial centroid selection."""

    def test_shuffle_then_take_first_k(self, separated_matrix):
        """Test centroids are the first k rows of the seeded permutation."""
        centroids, indices = select_initial_centroids(separated_matrix, 2, make_rng(True))

        expected = np.random.default_rng(3).permutation(4)[:2]
        assert indices.tolist() == expected.tolist()
        assert np.array_equal(centroids, separated_matrix[expected])

    def test_make_rng_uses_numpy_seed(self):
        """Test deterministic mode is numpy PCG64 seeded with 3."""
        assert make_rng(True).integers(0, 10**9, size=5).tolist() == \
            np.random.default_rng(3).integers(0, 10**9, size=5).tolist()

    def test_distinct_rows(self):
        """Test that selected row indices are distinct."""
        matrix = np.arange(40, dtype=float).reshape(20, 2)
        _, indices = select_initial_centroids(matrix, 7, np.random.default_rng(11))
        assert len(set(indices.tolist())) == 7

    def test_deterministic_seed_reproducible(self, separated_matrix):
        """Test that deterministic mode picks the same rows every time."""
        _, first = select_initial_centroids(separated_matrix, 3, make_rng(True))
        _, second = select_initial_centroids(separated_matrix, 3, make_rng(True))
        assert first.tolist() == second.tolist()

    def test_too_many_clusters(self, separated_matrix):
        """Test that k > n_samples is rejected."""
        with pytest.raises(InvalidInputError):
            select_initial_centroids(separated_matrix, 5, make_rng(True))

    def test_zero_clusters(self, separated_matrix):
        """Test that k < 1 is rejected."""
        with pytest.raises(InvalidInputError):
            select_initial_centroids(separated_matrix, 0, make_rng(True))


class TestAssignNearestCluster:
    """Test cases for nearest centroid assignment."""

    def test_nearest(self):
        """Test that the closest centroid is chosen."""
        centroids = np.array([[0.0, 0.0], [5.0, 5.0], [10.0, 10.0]])
        assert assign_nearest_cluster(np.array([9.0, 9.5]), centroids) == 2
        assert assign_nearest_cluster(np.array([4.0, 6.0]), centroids) == 1

    def test_tie_break_first_wins(self):
        """Test a sample equidistant from centroids 0 and 2 goes to 0."""
        centroids = np.array([[0.0, 0.0], [5.0, 5.0], [2.0, 0.0]])
        sample = np.array([1.0, 0.0])

        assert euclidean_distance(sample, centroids[0]) == euclidean_distance(sample, centroids[2])
        assert assign_nearest_cluster(sample, centroids) == 0

    def test_identical_centroids(self):
        """Test duplicated centroids resolve to the lowest index."""
        centroids = np.array([[1.0, 1.0], [1.0, 1.0]])
        assert assign_nearest_cluster(np.array([3.0, 3.0]), centroids) == 0

    def test_accepts_lists(self):
        """Test that plain lists are accepted."""
        assert assign_nearest_cluster([0.0, 1.0], [[5.0, 5.0], [0.0, 0.0]]) == 1

    def test_custom_distance(self):
        """Test that a distance callable is used."""
        def manhattan(a, b):
            return float(np.abs(a - b).sum())

        centroids = np.array([[0.0, 3.0], [2.0, 2.0]])
        sample = np.array([0.0, 0.0])
        # Евклидово: 3.0 против 2.83, манхэттенское: 3.0 против 4.0
        assert assign_nearest_cluster(sample, centroids) == 1
        assert assign_nearest_cluster(sample, centroids, distance=manhattan) == 0

    def test_no_centroids(self):
        """Test that an empty centroid set is rejected."""
        with pytest.raises(InvalidInputError):
            assign_nearest_cluster(np.array([1.0]), np.empty((0, 1)))


class TestAssignAll:
    """Test cases for assign_all."""

    def test_assignment_is_a_minimizer(self):
        """Test no centroid is strictly closer than the assigned one."""
        rng = np.random.default_rng(0)
        matrix = rng.normal(size=(30, 4))
        centroids = rng.normal(size=(5, 4))

        labels = assign_all(matrix, centroids)

        assert labels.shape == (30,)
        for row, label in enumerate(labels):
            assert 0 <= label < 5
            assigned = euclidean_distance(matrix[row], centroids[label])
            for centroid in centroids:
                assert euclidean_distance(matrix[row], centroid) >= assigned

    def test_threads_match_sequential(self):
        """Test that the threaded pass gives the same labels."""
        rng = np.random.default_rng(1)
        matrix = rng.normal(size=(25, 3))
        centroids = rng.normal(size=(4, 3))

        sequential = assign_all(matrix, centroids, n_jobs=1)
        threaded = assign_all(matrix, centroids, n_jobs=4)
        assert np.array_equal(sequential, threaded)

    def test_dimension_mismatch(self, separated_matrix):
        """Test centroids of different width are rejected."""
        with pytest.raises(InvalidInputError):
            assign_all(separated_matrix, np.zeros((2, 3)))


class TestRecomputeCentroids:
    """Test cases for recompute_centroids."""

    def test_means(self, separated_matrix):
        """Test that centroids are per-cluster means."""
        centroids = recompute_centroids(separated_matrix, np.array([0, 0, 1, 1]), 2)
        assert np.allclose(centroids, [[0.0, 0.5], [10.0, 10.5]])

    def test_empty_cluster(self, separated_matrix):
        """Test that a cluster without members raises EmptyClusterError."""
        with pytest.raises(EmptyClusterError) as exc_info:
            recompute_centroids(separated_matrix, np.array([0, 0, 2, 2]), 3, iteration=4)

        assert exc_info.value.cluster_id == 1
        assert exc_info.value.iteration == 4


class TestRunKMeans:
    """Test cases for the convergence loop."""

    def test_separated_groups(self, separated_matrix):
        """Test the two obvious groups are found."""
        labels = cluster(separated_matrix, 2, deterministic=True)

        assert len(labels) == 4
        assert groups_of(labels) == [{0, 1}, {2, 3}]

    @pytest.mark.parametrize("order", [[0, 1, 2, 3], [2, 3, 0, 1], [0, 2, 1, 3], [3, 1, 2, 0]])
    def test_separated_groups_any_start(self, separated_matrix, fixed_order_rng, order):
        """Test the grouping does not depend on which rows seed the centroids."""
        result = run_kmeans(separated_matrix, 2, rng=fixed_order_rng(order))

        assert result.converged
        assert groups_of(result.labels) == [{0, 1}, {2, 3}]
        assert result.initial_indices.tolist() == order[:2]

    def test_iterations_counted(self, separated_matrix, fixed_order_rng):
        """Test a start inside one group needs a second pass to confirm."""
        result = run_kmeans(separated_matrix, 2, rng=fixed_order_rng([0, 1, 2, 3]))

        assert result.n_iter == 2
        assert result.labels.tolist() == [0, 0, 1, 1]
        assert np.allclose(result.centroids, [[0.0, 0.5], [10.0, 10.5]])

    def test_max_iter_guard(self, separated_matrix, fixed_order_rng):
        """Test the iteration cap stops the loop without convergence."""
        result = run_kmeans(separated_matrix, 2, rng=fixed_order_rng([0, 1, 2, 3]), max_iter=1)

        assert not result.converged
        assert result.n_iter == 1
        assert result.labels.tolist() == [0, 0, 1, 1]

    def test_deterministic_reproducible(self):
        """Test two deterministic runs return identical labels."""
        matrix = np.random.default_rng(5).normal(size=(40, 6))

        first = cluster(matrix, 4, deterministic=True)
        second = cluster(matrix, 4, deterministic=True)
        assert np.array_equal(first, second)

    def test_explicit_rng_reproducible(self):
        """Test that equally seeded explicit generators agree."""
        matrix = np.random.default_rng(6).normal(size=(40, 6))

        first = cluster(matrix, 3, rng=np.random.default_rng(42))
        second = cluster(matrix, 3, rng=np.random.default_rng(42))
        assert np.array_equal(first, second)

    def test_random_mode_valid(self, separated_matrix):
        """Test non-deterministic mode still returns a valid assignment."""
        labels = cluster(separated_matrix, 2, deterministic=False)

        assert labels.shape == (4,)
        assert set(labels.tolist()) <= {0, 1}

    def test_single_cluster(self, separated_matrix):
        """Test k = 1 puts every row in cluster 0."""
        assert cluster(separated_matrix, 1, deterministic=True).tolist() == [0, 0, 0, 0]

    def test_each_row_own_cluster(self, separated_matrix):
        """Test k = n_samples gives every row its own cluster."""
        labels = cluster(separated_matrix, 4, deterministic=True)
        assert sorted(labels.tolist()) == [0, 1, 2, 3]

    def test_empty_cluster_collapse(self):
        """Test duplicate rows as centroids lead to EmptyClusterError."""
        matrix = np.ones((3, 2))
        with pytest.raises(EmptyClusterError):
            cluster(matrix, 2, deterministic=True)

    def test_invalid_n_clusters(self, separated_matrix):
        """Test k outside [1, n_samples] is rejected."""
        with pytest.raises(InvalidInputError):
            cluster(separated_matrix, 0)
        with pytest.raises(InvalidInputError):
            cluster(separated_matrix, 5)

    def test_invalid_max_iter(self, separated_matrix):
        """Test non-positive max_iter is rejected."""
        with pytest.raises(InvalidInputError):
            run_kmeans(separated_matrix, 2, max_iter=0)

    def test_ragged_input(self):
        """Test ragged rows are rejected."""
        with pytest.raises(InvalidInputError):
            cluster([[0.0, 1.0], [1.0]], 1)


class TestKMeansClusterer:
    """Test cases for KMeansClusterer class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.clusterer = KMeansClusterer(n_clusters=2, deterministic=True, max_iter=50)

    def test_init(self):
        """Test KMeansClusterer initialization."""
        assert self.clusterer.n_clusters == 2
        assert self.clusterer.deterministic is True
        assert self.clusterer.max_iter == 50
        assert self.clusterer.centroids_ is None

    def test_fit_predict(self, separated_matrix):
        """Test fit_predict returns a list and stores the fitted state."""
        labels = self.clusterer.fit_predict(separated_matrix.tolist())

        assert isinstance(labels, list)
        assert groups_of(labels) == [{0, 1}, {2, 3}]
        assert self.clusterer.centroids_.shape == (2, 2)
        assert self.clusterer.converged_
        assert self.clusterer.n_iter_ >= 1

    def test_get_cluster_info(self):
        """Test cluster info groups indices by label."""
        info = self.clusterer.get_cluster_info([1, 0, 1, 1])

        assert info == {
            0: {"size": 1, "indices": [1]},
            1: {"size": 3, "indices": [0, 2, 3]},
        }
