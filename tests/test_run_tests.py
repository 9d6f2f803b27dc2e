"""Unit tests for the run_tests runner script."""

import subprocess
from unittest.mock import MagicMock, patch

import run_tests


class TestRunTests:
    """Test cases for the test runner."""

    def test_coverage_run_targets_package(self):
        """Test the coverage command measures the page_clusterer package."""
        coverage_cmds = [cmd for cmd, _ in run_tests.COMMANDS if "--cov" in cmd]

        assert len(coverage_cmds) == 1
        assert "--cov=page_clusterer" in coverage_cmds[0]

    def test_main_success(self):
        """Test exit code 0 when every command passes."""
        with patch("run_tests.os.chdir"), \
                patch("run_tests.subprocess.run", return_value=MagicMock(stdout="ok")) as mock_run:
            assert run_tests.main() == 0

        assert mock_run.call_count == len(run_tests.COMMANDS)

    def test_main_failure(self):
        """Test exit code 1 when a command fails."""
        error = subprocess.CalledProcessError(1, "pytest", output="", stderr="failed")
        with patch("run_tests.os.chdir"), \
                patch("run_tests.subprocess.run", side_effect=error):
            assert run_tests.main() == 1
