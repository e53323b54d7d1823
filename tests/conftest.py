"""Pytest configuration and shared fixtures for the emlc test suite.

This module provides shared fixtures, test configuration, and the
Hypothesis profiles used by the property-based tests.
"""

import logging
import os
from pathlib import Path

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

# Register custom Hypothesis profiles
_SUPPRESSED = [HealthCheck.function_scoped_fixture, HealthCheck.too_slow]
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose, suppress_health_check=_SUPPRESSED)
settings.register_profile("dev", max_examples=20, suppress_health_check=_SUPPRESSED)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate],
    suppress_health_check=_SUPPRESSED,
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep configuration discovery away from the developer's real files.

    The working directory and home directory both point at fresh empty
    directories, and ``EMLC_CONFIG`` is unset.
    """
    work_dir = tmp_path_factory.mktemp("cwd")
    home_dir = tmp_path_factory.mktemp("home")
    monkeypatch.chdir(work_dir)
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    monkeypatch.delenv("EMLC_CONFIG", raising=False)
    return work_dir


@pytest.fixture
def sample_eml() -> str:
    """Provide a small EML document exercising most constructs.

    Returns
    -------
    str
        EML source text

    """
    return """// page header
import com.example.Widget;

div (class="card", hidden) {
    h1 { Hello World }
    br
    p {}
}


php {
    echo $title;
}
"""


@pytest.fixture
def sample_html() -> str:
    """Provide a small HTML document with the matching structure."""
    return """<!-- page header -->
<?import com.example.Widget?>

<div class="card" hidden="">
    <h1>Hello World</h1>
    <br>
    <p></p>
</div>


<?php
    echo $title;
?>
"""


@pytest.fixture
def write_file(tmp_path: Path):
    """Return a helper that writes text to a file under ``tmp_path``."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the root logger changes made by ``configure_logging`` in CLI tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
