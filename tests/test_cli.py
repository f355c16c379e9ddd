import io
from pathlib import Path

import pytest
import yaml

from speakable_time import loader, settings
from speakable_time.cli import main

NOW = ["--now", "2024-01-07T06:00Z", "--locale", "en"]
BIRTHDAY = "1978-04-06T06:00Z"


@pytest.fixture(autouse=True)
def fresh_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(loader, "_default", None)
    monkeypatch.delenv("SPEAKABLE_TIME_LOCALE", raising=False)
    monkeypatch.delenv("SPEAKABLE_TIME_LOCALES_DIR", raising=False)


def run(capsys, *argv: str) -> tuple[int, str, str]:
    status = main(list(argv))
    captured = capsys.readouterr()
    return status, captured.out, captured.err


def test_top_units(capsys) -> None:
    status, out, _ = run(capsys, BIRTHDAY, *NOW, "--top", "3")

    assert status == 0
    assert out == "45 years, 9 months and 1 day ago\n"


def test_fancy_format(capsys) -> None:
    _, out, _ = run(capsys, BIRTHDAY, "2024-01-09T06:00Z", *NOW, "-f", "fancy", "-t", "2")

    assert out.splitlines() == ["45y9m", "in 2d"]


def test_round_units_absolute(capsys) -> None:
    _, out, _ = run(capsys, BIRTHDAY, *NOW, "-r", "year", "--round", "days", "--absolute")

    assert out == "45 years and 275 days\n"


def test_top_and_round_are_exclusive(capsys) -> None:
    with pytest.raises(SystemExit):
        main([BIRTHDAY, "--top", "2", "--round", "day"])


def test_unknown_round_unit(capsys) -> None:
    with pytest.raises(SystemExit):
        main([BIRTHDAY, "--round", "fortnight"])


def test_reads_stdin(capsys, monkeypatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("2024-01-09T06:00Z\n\n2024-01-07T06:00Z\n"))

    _, out, _ = run(capsys, *NOW)

    assert out.splitlines() == ["in 2 days", "now"]


def test_bad_date_reports_and_continues(capsys) -> None:
    status, out, err = run(capsys, "not a date", "2024-01-05T06:00Z", *NOW)

    assert status == 1
    assert out == "2 days ago\n"
    assert "error: 'not a date'" in err


def test_unknown_locale(capsys) -> None:
    status, out, err = run(capsys, BIRTHDAY, "--now", "2024-01-07T06:00Z", "-l", "xx")

    assert status == 1
    assert out == ""
    assert "No locale table for 'xx'" in err


def test_locales_dir(capsys, tmp_path: Path) -> None:
    table = {
        "units": {"day": {"one": "dia", "other": "dias"}},
        "relative": {"coarse": {"past": "faz {duration}"}},
    }
    (tmp_path / "pt.yml").write_text(yaml.safe_dump(table), encoding="utf-8")

    status, out, _ = run(
        capsys,
        "2024-01-05T06:00Z",
        "--now",
        "2024-01-07T06:00Z",
        "--round",
        "day",
        "--locales-dir",
        str(tmp_path),
        "--locale",
        "pt",
    )

    assert status == 0
    assert out == "faz 2 dias\n"


def test_missing_locales_dir(capsys, tmp_path: Path) -> None:
    status, _, err = run(capsys, BIRTHDAY, *NOW, "--locales-dir", str(tmp_path / "none"))

    assert status == 1
    assert err.startswith("error: Locales directory not found")


def test_locales_dir_falls_back_from_system_locale(
    capsys, monkeypatch, tmp_path: Path
) -> None:
    table = {
        "units": {"day": {"one": "day", "other": "days"}},
        "relative": {"coarse": {"past": "{duration} ago"}},
    }
    (tmp_path / "en.yml").write_text(yaml.safe_dump(table), encoding="utf-8")
    monkeypatch.setattr(settings, "system_locale", lambda: "de_DE")

    status, out, err = run(
        capsys,
        "2024-01-05T06:00Z",
        "--now",
        "2024-01-07T06:00Z",
        "--round",
        "day",
        "--locales-dir",
        str(tmp_path),
    )

    assert status == 0
    assert out == "2 days ago\n"
    assert err == ""
