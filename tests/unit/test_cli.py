import sys

import pytest
from click.testing import CliRunner

from expectations.cli import main
from expectations.testing.case import clear_registry


@pytest.fixture(autouse=True)
def clean_registry(monkeypatch):
    monkeypatch.delenv("EXPECTATIONS_PATTERN", raising=False)
    monkeypatch.delenv("EXPECTATIONS_VERBOSITY", raising=False)
    clear_registry()
    yield
    clear_registry()
    for name in [name for name in sys.modules if name.startswith("expect_") or ".expect_" in name]:
        del sys.modules[name]


def test_passing_run_exits_zero(tmp_path):
    (tmp_path / "expect_ok.py").write_text("expect(2, 1 + 1)\nexpect(int, 3)\n")

    result = CliRunner().invoke(main, [str(tmp_path)])

    assert result.exit_code == 0
    assert "Ran 2 tests containing 2 assertions." in result.output
    assert "0 failures, 0 errors." in result.output


def test_failing_run_exits_one(tmp_path):
    (tmp_path / "expect_bad.py").write_text('expect({"a": 1, "b": 2}, {"a": 1, "b": 3})\n')

    result = CliRunner().invoke(main, [str(tmp_path)])

    assert result.exit_code == 1
    assert "failure in (expect_bad.py:1) : expect_bad" in result.output
    assert "b expected 2 but was 3" in result.output
    assert "1 failures, 0 errors." in result.output


def test_verbose_lists_passes(tmp_path):
    (tmp_path / "expect_ok.py").write_text("expect(1, 1)\n")

    result = CliRunner().invoke(main, [str(tmp_path), "-v"])

    assert "expect_ok:1" in result.output


def test_quiet_hides_summary(tmp_path):
    (tmp_path / "expect_ok.py").write_text("expect(1, 1)\n")

    result = CliRunner().invoke(main, [str(tmp_path), "-q"])

    assert result.exit_code == 0
    assert "Ran" not in result.output


def test_pattern_selects_namespaces(tmp_path):
    (tmp_path / "expect_ok.py").write_text("expect(1, 1)\n")
    (tmp_path / "expect_bad.py").write_text("expect(1, 2)\n")

    result = CliRunner().invoke(main, [str(tmp_path), "-k", "expect_ok"])

    assert result.exit_code == 0
    assert "Ran 1 tests" in result.output


def test_no_expectations(tmp_path):
    result = CliRunner().invoke(main, [str(tmp_path)])

    assert result.exit_code == 0
    assert "No expectations found." in result.output


def test_unparsable_file_exits_two(tmp_path):
    (tmp_path / "expect_broken.py").write_text("expect(1,\n")

    result = CliRunner().invoke(main, [str(tmp_path)])

    assert result.exit_code == 2


def test_equally_named_files_all_run(tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    (tmp_path / "a" / "expect_same.py").write_text("expect(1, 2)\n")
    (tmp_path / "b" / "expect_same.py").write_text("expect(3, 3)\n")

    result = CliRunner().invoke(main, [str(tmp_path)])

    assert result.exit_code == 1
    assert "Ran 2 tests containing 2 assertions." in result.output
    assert "1 failures, 0 errors." in result.output


def test_only_collected_cases_run(tmp_path):
    from expectations.testing.case import Expectation, SourceMeta, TestCase, register

    register(TestCase(SourceMeta("expect_elsewhere", 1), Expectation(lambda: 1, lambda: 2)))
    (tmp_path / "expect_ok.py").write_text("expect(1, 1)\n")

    result = CliRunner().invoke(main, [str(tmp_path)])

    assert result.exit_code == 0
    assert "Ran 1 tests" in result.output


def test_module_raising_on_load_exits_two(tmp_path):
    (tmp_path / "expect_broken.py").write_text("raise RuntimeError('cannot load')\n")

    result = CliRunner().invoke(main, [str(tmp_path)])

    assert result.exit_code == 2
    assert "cannot load" in result.output
