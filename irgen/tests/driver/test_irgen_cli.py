# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from irgen.cli import default_output_name, main

CASES = Path(__file__).resolve().parents[1] / "test_cases"


@pytest.fixture
def option_pkg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
	"""Copy of the option package, set up the way `go generate` runs us."""
	shutil.copy(CASES / "option" / "option.go", tmp_path / "option.go")
	monkeypatch.chdir(tmp_path)
	monkeypatch.setenv("GOFILE", "option.go")
	monkeypatch.setenv("GOPACKAGE", "option")
	return tmp_path


def _golden() -> str:
	return (CASES / "option" / "option_impl.golden").read_text()


def test_default_output_name(option_pkg: Path, capsys: pytest.CaptureFixture[str]) -> None:
	assert default_output_name("Option") == "option_impl.go"
	assert main(["Option", "OptionConsumer"]) == 0
	assert (option_pkg / "option_impl.go").read_text() == _golden()
	out, err = capsys.readouterr()
	assert out == ""
	assert err == ""


@pytest.mark.parametrize("flag", ["-o", "-out", "--out"])
def test_explicit_output_file(flag: str, option_pkg: Path) -> None:
	assert main([flag, "gen.go", "Option", "OptionConsumer"]) == 0
	assert (option_pkg / "gen.go").read_text() == _golden()
	assert not (option_pkg / "option_impl.go").exists()


def test_dash_writes_to_stdout(option_pkg: Path, capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["-out", "-", "Option", "OptionConsumer"]) == 0
	out, _err = capsys.readouterr()
	assert out == _golden()
	assert not (option_pkg / "option_impl.go").exists()


def test_verbose_copies_output_to_stdout(option_pkg: Path, capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["-v", "Option", "OptionConsumer"]) == 0
	out, _err = capsys.readouterr()
	assert out == _golden()
	assert (option_pkg / "option_impl.go").read_text() == _golden()


def test_receiver_style(option_pkg: Path, capsys: pytest.CaptureFixture[str]) -> None:
	(option_pkg / "option.go").write_text(
		"package option\n\ntype MaybeInt interface{ FeedTo(c C) }\ntype C interface{ Some(X int) }\n"
	)
	assert main(["--receiver-style", "lower", "-o", "-", "MaybeInt", "C"]) == 0
	out, _err = capsys.readouterr()
	assert "func (maybeint *Some) FeedTo(consumer C) {" in out


def test_failure_reports_diagnostic_and_creates_no_file(option_pkg: Path, capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["Option", "Missing"]) == 1
	_out, err = capsys.readouterr()
	assert err == "irgen:?:?: error: no type named Missing in package option\n"
	assert not (option_pkg / "option_impl.go").exists()


def test_shape_error_points_at_the_declaration(option_pkg: Path, capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["OptionConsumer", "Option"]) == 1
	_out, err = capsys.readouterr()
	assert err.startswith("option.go:12:6: error: the composite type should have 1 method (has 2)")


def test_existing_output_is_kept_on_failure(option_pkg: Path) -> None:
	target = option_pkg / "option_impl.go"
	target.write_text("previous\n")
	assert main(["Option", "Missing"]) == 1
	assert target.read_text() == "previous\n"


def test_json_diagnostics(option_pkg: Path, capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["--json", "Option", "Missing"]) == 1
	_out, err = capsys.readouterr()
	payload = json.loads(err)
	assert payload["exit_code"] == 1
	[diag] = payload["diagnostics"]
	assert diag["code"] == "E_NOT_FOUND"
	assert diag["phase"] == "lookup"
	assert diag["severity"] == "error"


def test_missing_gofile(option_pkg: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
	monkeypatch.delenv("GOFILE")
	assert main(["Option", "OptionConsumer"]) == 1
	_out, err = capsys.readouterr()
	assert "environment variable GOFILE missing or empty" in err
	assert not (option_pkg / "option_impl.go").exists()


def test_empty_gopackage(option_pkg: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
	monkeypatch.setenv("GOPACKAGE", "")
	assert main(["Option", "OptionConsumer"]) == 1
	assert "environment variable GOPACKAGE missing or empty" in capsys.readouterr().err


def test_dir_and_package_override_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
	monkeypatch.chdir(tmp_path)
	monkeypatch.delenv("GOFILE", raising=False)
	monkeypatch.delenv("GOPACKAGE", raising=False)
	out = tmp_path / "out.go"
	args = ["--dir", str(CASES / "option"), "--package", "option", "-o", str(out), "Option", "OptionConsumer"]
	assert main(args) == 0
	assert out.read_text() == _golden()


def test_unresolved_import_is_a_warning(option_pkg: Path, capsys: pytest.CaptureFixture[str]) -> None:
	(option_pkg / "option.go").write_text(
		"package option\n\ntype Opt interface{ FeedTo(c C) }\ntype C interface{ Some(X big.Int) }\n"
	)
	assert main(["-o", "-", "Opt", "C"]) == 0
	out, err = capsys.readouterr()
	assert "X big.Int" in out
	assert "warning: no import found for package qualifier big" in err


def test_missing_positionals_is_a_usage_error(option_pkg: Path, capsys: pytest.CaptureFixture[str]) -> None:
	with pytest.raises(SystemExit) as excinfo:
		main(["Option"])
	assert excinfo.value.code == 2
	assert "usage: irgen" in capsys.readouterr().err


def test_unwritable_output(option_pkg: Path, capsys: pytest.CaptureFixture[str]) -> None:
	assert main(["-o", str(option_pkg / "missing" / "out.go"), "Option", "OptionConsumer"]) == 1
	_out, err = capsys.readouterr()
	assert "error: cannot write" in err
