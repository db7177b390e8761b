"""Unit tests for the ``zhuyin-parse`` command line."""

from __future__ import annotations

import pytest

from zhuyin_parser.cli import _format_table, build_arg_parser, main


def test_format_table_pads_columns() -> None:
    table = _format_table(["span", "zhuyin"], [["0-3", "ㄋㄧˇ"], ["3-6", "ㄏㄠ"]])

    assert table.splitlines() == [
        "span | zhuyin",
        "-----+-------",
        "0-3  | ㄋㄧˇ   ",
        "3-6  | ㄏㄠ    ",
    ]


def test_build_arg_parser_defaults() -> None:
    args = build_arg_parser().parse_args(["su3"])

    assert args.scheme == "standard"
    assert args.option == []
    assert not args.tone


def test_main_prints_keys_for_fully_parsed_input(capsys: pytest.CaptureFixture[str]) -> None:
    status = main(["--scheme", "hanyu-pinyin", "--tone", "ni3 hao3"])
    out = capsys.readouterr().out

    assert status == 0
    assert "span | raw" in out
    assert "ㄋㄧˇ" in out
    assert "hao3" in out
    assert "unparsed" not in out


def test_main_reports_remainder_and_fails(capsys: pytest.CaptureFixture[str]) -> None:
    status = main(["--tone", "su3", "su3!"])
    out = capsys.readouterr().out

    assert status == 1
    assert "WARNING: unparsed remainder at offset 3: '!'" in out


def test_main_accepts_repeatable_options(capsys: pytest.CaptureFixture[str]) -> None:
    status = main(["--scheme", "hsu", "--option", "use-tone", "--option", "amb-c-ch", "nefhwf"])

    assert status == 0
    assert "ni3" in capsys.readouterr().out


def test_main_rejects_unknown_option(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--option", "use-colour", "su3"])

    assert excinfo.value.code == 2
    assert "Unknown parse option" in capsys.readouterr().err
