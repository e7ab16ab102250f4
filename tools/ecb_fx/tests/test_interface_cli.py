# Methodology: TDD – tests for interface.cli
from __future__ import annotations

import argparse
from datetime import date
from decimal import Decimal, localcontext

import pytest

from tools.ecb_fx.application.converter import CONVERSION_PRECISION
from tools.ecb_fx.interface.cli import build_parser, main


def _write_feed(tmp_path):
    feed = tmp_path / "usdeur.csv"
    feed.write_text(
        "\n".join([
            "Data Source in SDW: null",
            "Period\\Unit:,[US dollar ]",
            "2017-01-19,1.0668",
            "2017-01-11,1.0503",
            "",
        ]),
        encoding="utf-8",
    )
    return feed


def test_build_parser():
    parser = build_parser()
    assert isinstance(parser, argparse.ArgumentParser)

    args = parser.parse_args(["convert", "120", "2017-01-15"])
    assert args.command == "convert"
    assert args.amount == Decimal("120")
    assert args.date == date(2017, 1, 15)
    assert args.store == "rates.sqlite3"
    assert args.debug is False

    args = parser.parse_args(["--debug", "--store", "x.sqlite3", "load", "--feed", "f.csv", "--delimiter", ";"])
    assert args.debug is True
    assert args.store == "x.sqlite3"
    assert args.feed == "f.csv"
    assert args.delimiter == ";"


def test_build_parser_rejects_bad_arguments():
    parser = build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["rate", "2017-02-30"])
    with pytest.raises(SystemExit):
        parser.parse_args(["convert", "abc", "2017-01-15"])


def test_main_load_then_convert(tmp_path, capsys):
    feed = _write_feed(tmp_path)
    db = str(tmp_path / "rates.sqlite3")

    assert main(["--store", db, "load", "--feed", str(feed)]) == 0
    assert capsys.readouterr().out.strip() == "2"

    assert main(["--store", db, "rate", "2017-01-15"]) == 0
    assert capsys.readouterr().out.strip() == "1.0503"

    assert main(["--store", db, "convert", "120", "2017-01-15"]) == 0
    with localcontext() as ctx:
        ctx.prec = CONVERSION_PRECISION
        expected = Decimal("120") / Decimal("1.0503")
    assert capsys.readouterr().out.strip() == str(expected)

    assert main(["--store", db, "status"]) == 0
    assert capsys.readouterr().out.strip() == "rates=2 latest=2017-01-19"


def test_main_out_of_range_returns_2(tmp_path, capsys):
    feed = _write_feed(tmp_path)
    db = str(tmp_path / "rates.sqlite3")
    main(["--store", db, "load", "--feed", str(feed)])
    capsys.readouterr()

    assert main(["--store", db, "rate", "1999-12-31"]) == 2
    assert main(["--store", db, "convert", "10", "2016-01-01"]) == 2
    assert capsys.readouterr().out == ""


def test_main_missing_feed_returns_2(tmp_path):
    assert main(["--store", str(tmp_path / "rates.sqlite3"), "load", "--feed", str(tmp_path / "none.csv")]) == 2
