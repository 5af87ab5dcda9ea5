"""Unit tests for flatc_gen() in flatc_gen/generator.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from flatc_gen.config import FlatcGenConfig
from flatc_gen.errors import ExternalCommandError, MissingInputError
from flatc_gen.generator import flatc_gen
from tests.fakes import FakeCommandRunner


@pytest.fixture
def schema(tmp_path: Path) -> Path:
    path = tmp_path / "addressbook.fbs"
    path.write_text("table Person { name: string; }\nroot_type Person;\n")
    return path


def _flatc_commands(runner: FakeCommandRunner, cache_dir: Path) -> list[list[str]]:
    return runner.commands(str(cache_dir / "flatbuffers" / "build" / "flatc"))


class TestFlatcGen:
    def test_missing_schema_fails_before_touching_cache(
        self, tmp_path: Path, config: FlatcGenConfig, cache_dir: Path
    ) -> None:
        runner = FakeCommandRunner()
        missing = tmp_path / "nope.fbs"

        with pytest.raises(MissingInputError) as exc_info:
            flatc_gen(missing, tmp_path / "out", config=config, runner=runner)

        assert exc_info.value.path == missing
        assert "does not exist" in str(exc_info.value)
        assert runner.calls == []
        assert not cache_dir.exists()

    def test_runs_flatc_with_language_output_and_schema(
        self,
        schema: Path,
        tmp_path: Path,
        config: FlatcGenConfig,
        fake_runner: FakeCommandRunner,
        cache_dir: Path,
    ) -> None:
        flatc = str(cache_dir / "flatbuffers" / "build" / "flatc")
        fake_runner.register(flatc)
        out_dir = tmp_path / "generated"

        flatc_gen(schema, out_dir, config=config, runner=fake_runner)

        assert fake_runner.calls[-1].cmd == [
            flatc,
            "--rust",
            "-o",
            str(out_dir),
            "-b",
            str(schema),
        ]

    def test_language_from_config(
        self, schema: Path, tmp_path: Path, cache_dir: Path, fake_runner: FakeCommandRunner
    ) -> None:
        config = FlatcGenConfig(cache_dir=cache_dir, language="cpp")
        fake_runner.register(str(cache_dir / "flatbuffers" / "build" / "flatc"))

        flatc_gen(schema, tmp_path / "out", config=config, runner=fake_runner)

        assert _flatc_commands(fake_runner, cache_dir)[0][1] == "--cpp"

    def test_accepts_string_paths(
        self,
        schema: Path,
        tmp_path: Path,
        config: FlatcGenConfig,
        fake_runner: FakeCommandRunner,
        cache_dir: Path,
    ) -> None:
        fake_runner.register(str(cache_dir / "flatbuffers" / "build" / "flatc"))

        flatc_gen(str(schema), str(tmp_path / "out"), config=config, runner=fake_runner)

        assert len(_flatc_commands(fake_runner, cache_dir)) == 1

    def test_rerun_reuses_cache(
        self,
        schema: Path,
        tmp_path: Path,
        config: FlatcGenConfig,
        fake_runner: FakeCommandRunner,
        cache_dir: Path,
    ) -> None:
        fake_runner.register(str(cache_dir / "flatbuffers" / "build" / "flatc"))

        flatc_gen(schema, tmp_path / "out", config=config, runner=fake_runner)
        flatc_gen(schema, tmp_path / "out", config=config, runner=fake_runner)

        assert len(fake_runner.commands("git", "clone")) == 1
        assert len(_flatc_commands(fake_runner, cache_dir)) == 2

    def test_flatc_failure_raises(
        self,
        schema: Path,
        tmp_path: Path,
        config: FlatcGenConfig,
        fake_runner: FakeCommandRunner,
        cache_dir: Path,
    ) -> None:
        fake_runner.register(
            str(cache_dir / "flatbuffers" / "build" / "flatc"),
            returncode=1,
            stderr="error: addressbook.fbs:1: 2: error: expecting: ; instead got: }",
        )

        with pytest.raises(ExternalCommandError) as exc_info:
            flatc_gen(schema, tmp_path / "out", config=config, runner=fake_runner)

        assert exc_info.value.name == "flatc"
        assert "expecting: ;" in exc_info.value.diagnostics()

    def test_build_error_propagates_unchanged(
        self,
        schema: Path,
        tmp_path: Path,
        config: FlatcGenConfig,
        fake_runner: FakeCommandRunner,
    ) -> None:
        fake_runner.register("git", "clone", returncode=128, stderr="network down")

        with pytest.raises(ExternalCommandError) as exc_info:
            flatc_gen(schema, tmp_path / "out", config=config, runner=fake_runner)

        assert exc_info.value.name == "git clone"
