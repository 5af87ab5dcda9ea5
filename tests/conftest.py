"""Pytest configuration for flatc-gen tests."""

import os
from pathlib import Path

import pytest

from flatc_gen.config import FlatcGenConfig
from tests.fakes import FakeCommandRunner, build_creates_binary, clone_creates_tree
from tests.fakes.toolchain import FakeToolchain, install_fake_toolchain


def pytest_configure(config: pytest.Config) -> None:
    """Configure test environment before collection.

    Redirects the shared cache to /tmp so tests never clone or build into
    the real ~/.cache/flatc-gen, unless the e2e run asks for it.
    """
    if not os.environ.get("FLATC_GEN_E2E"):
        os.environ["FLATC_GEN_CACHE_DIR"] = "/tmp/flatc-gen-test-cache"


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Default unmarked tests to unit category."""
    for item in items:
        if any(marker in item.keywords for marker in ("unit", "integration", "e2e")):
            continue
        item.add_marker(pytest.mark.unit)


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """A cache root that does not exist yet."""
    return tmp_path / "cache" / "flatc-gen"


@pytest.fixture
def config(cache_dir: Path) -> FlatcGenConfig:
    """Config pointing at an isolated cache with a fast lock policy."""
    return FlatcGenConfig(
        cache_dir=cache_dir, lock_max_attempts=3, lock_poll_interval=0.05
    )


@pytest.fixture
def fake_runner() -> FakeCommandRunner:
    """Runner whose git clone and cmake build touch the filesystem like the real ones."""
    runner = FakeCommandRunner()
    runner.register("git", "clone", side_effect=clone_creates_tree)
    runner.register("cmake", "-Bbuild")
    runner.register("cmake", "--build", side_effect=build_creates_binary)
    return runner


@pytest.fixture
def fake_toolchain(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeToolchain:
    """Put fake git/cmake first on PATH for this process and its children."""
    toolchain = install_fake_toolchain(tmp_path / "toolchain")
    monkeypatch.setenv("PATH", f"{toolchain.bin_dir}{os.pathsep}{os.environ['PATH']}")
    monkeypatch.setenv("FLATC_GEN_TEST_LOG", str(toolchain.log_path))
    return toolchain
