"""
Pytest configuration and shared fixtures for the unityrunner test suite.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import List, Sequence, Tuple

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_parameters(temp_dir):
    """Factory for BuildParameters rooted in the temporary directory."""
    from unityrunner.models import BuildParameters

    workspace = temp_dir / "workspace"
    workspace.mkdir()
    runner_temp = temp_dir / "runner_temp"
    runner_temp.mkdir()

    def _make(**overrides) -> BuildParameters:
        values = {
            "action_folder": "/opt/action",
            "editor_version": "2021.3.1f1",
            "workspace": str(workspace),
            "runner_temporary_path": str(runner_temp),
            "project_path": "MyProject",
            "custom_parameters": "-nographics",
            "test_mode": "all",
            "coverage_options": "generateAdditionalMetrics",
            "artifacts_path": "artifacts",
        }
        values.update(overrides)
        return BuildParameters(**values)

    return _make


class RecordingCommandRunner:
    """Stands in for system.run_command and records every call."""

    def __init__(self, return_code: int = 0, stdout: str = "", stderr: str = ""):
        self.calls: List[List[str]] = []
        self.result = (return_code, stdout, stderr)

    def __call__(self, argv: Sequence[str], cwd=None, timeout=None) -> Tuple[int, str, str]:
        self.calls.append(list(argv))
        return self.result

    @property
    def removal_calls(self) -> List[List[str]]:
        return [call for call in self.calls if call[1:2] == ["rm"]]


@pytest.fixture
def command_runner():
    """A recording command runner reporting success."""
    return RecordingCommandRunner()


@pytest.fixture
def recording_runner_class():
    return RecordingCommandRunner


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data():
    """Sample runner configuration for testing."""
    return {
        "runner": {
            "docker_executable": "podman",
            "action_folder": "/opt/action",
            "log_level": "debug",
            "default_test_mode": "editmode",
            "timeouts": {
                "wait_poll_interval": 0.2,
                "removal_timeout": 30.0,
                "termination_graceful_timeout": 1.0,
                "termination_force_timeout": 1.0,
            },
        }
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write the sample configuration to a temporary config.toml."""
    import toml

    path = temp_dir / "config.toml"
    with open(path, "w") as f:
        toml.dump(sample_config_data, f)
    return path


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield

    from unityrunner.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(original_config_path)
