"""Tests for the fhxml command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from fhxml import __version__
from fhxml.cli import EXIT_FAILURE, EXIT_MISMATCH, EXIT_OK, build_parser, main


def write_fhx(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-16")
    return path


class TestArguments:
    def test_defaults(self) -> None:
        args = build_parser().parse_args(["POWER.fhx"])
        assert args.input == "POWER.fhx"
        assert args.output is None
        assert args.indent == "\t"
        assert args.input_encoding == "utf-16"
        assert args.output_encoding == "utf-8"
        assert args.wrap_root is False
        assert args.check is None

    def test_verbose_and_quiet_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["x.fhx", "-v", "-q"])

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestConvert:
    def test_single_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = write_fhx(tmp_path / "POWER.fhx", "A { X=1 }")
        assert main([str(source)]) == EXIT_OK
        assert (tmp_path / "POWER.xml").read_text(encoding="utf-8") == "<A>\n\t<X>1</X>\n</A>\n"
        out = capsys.readouterr().out
        assert out.startswith("completed! - Time elapsed: ")
        assert "POWER.xml" in out

    def test_quiet(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = write_fhx(tmp_path / "POWER.fhx", "A{}")
        assert main([str(source), "-q"]) == EXIT_OK
        assert capsys.readouterr().out == ""

    def test_output_option(self, tmp_path: Path) -> None:
        source = write_fhx(tmp_path / "POWER.fhx", "A{}")
        target = tmp_path / "out.xml"
        assert main([str(source), "-o", str(target), "-q"]) == EXIT_OK
        assert target.read_text(encoding="utf-8") == "<A />\n"

    def test_layout_options(self, tmp_path: Path) -> None:
        source = write_fhx(tmp_path / "POWER.fhx", "A { X=1 }")
        assert main([str(source), "--indent", "  ", "--wrap-root", "-q"]) == EXIT_OK
        assert (tmp_path / "POWER.xml").read_text(encoding="utf-8") == (
            "<FHX_ROOT>\n  <A>\n    <X>1</X>\n  </A>\n</FHX_ROOT>\n"
        )

    def test_directory(self, tmp_path: Path) -> None:
        write_fhx(tmp_path / "a.fhx", "A{}")
        write_fhx(tmp_path / "b.fhx", "B{}")
        out_dir = tmp_path / "xml"
        assert main([str(tmp_path), "--output-dir", str(out_dir), "-q"]) == EXIT_OK
        assert sorted(p.name for p in out_dir.iterdir()) == ["a.xml", "b.xml"]

    def test_directory_with_output_rejected(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        write_fhx(tmp_path / "a.fhx", "A{}")
        write_fhx(tmp_path / "b.fhx", "B{}")
        assert main([str(tmp_path), "-o", str(tmp_path / "x.xml")]) == EXIT_FAILURE
        assert "single input" in capsys.readouterr().err


class TestFailures:
    def test_missing_input(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "missing.fhx")]) == EXIT_FAILURE
        assert capsys.readouterr().err.startswith("FAILURE: Input path does not exist")

    def test_parse_failure(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = write_fhx(tmp_path / "BROKEN.fhx", "A {\n  X=\n}")
        assert main([str(source)]) == EXIT_FAILURE
        err = capsys.readouterr().err
        assert "FAILURE: Failed to convert" in err
        assert "BROKEN.fhx:3:1" in err
        assert not (tmp_path / "BROKEN.xml").exists()

    def test_one_bad_file_in_directory(self, tmp_path: Path) -> None:
        write_fhx(tmp_path / "a.fhx", "A{")
        write_fhx(tmp_path / "b.fhx", "B{}")
        assert main([str(tmp_path), "-q"]) == EXIT_FAILURE
        assert not (tmp_path / "a.xml").exists()
        assert (tmp_path / "b.xml").exists()


class TestCheck:
    def test_matching_exemplar(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = write_fhx(tmp_path / "POWER.fhx", "A { X=1 }")
        exemplar = tmp_path / "POWER_EXEMPLAR.xml"
        exemplar.write_text("<A>\n\t<X>1</X>\n</A>\n", encoding="utf-8")
        assert main([str(source), "--check", str(exemplar)]) == EXIT_OK
        assert f"Output matches {exemplar}" in capsys.readouterr().out

    def test_mismatching_exemplar(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = write_fhx(tmp_path / "POWER.fhx", "A { X=1 }")
        exemplar = tmp_path / "POWER_EXEMPLAR.xml"
        exemplar.write_text("<A>\n\t<X>2</X>\n</A>\n", encoding="utf-8")
        assert main([str(source), "--check", str(exemplar)]) == EXIT_MISMATCH
        assert "at line 2" in capsys.readouterr().err

    def test_missing_exemplar(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = write_fhx(tmp_path / "POWER.fhx", "A{}")
        assert main([str(source), "--check", str(tmp_path / "none.xml")]) == EXIT_FAILURE
        assert "cannot compare" in capsys.readouterr().err
