import logging

import pytest

from motp import cli
from motp.otp.generator import Generator

T0 = 1625097600


@pytest.fixture(autouse=True)
def _no_env(monkeypatch) -> None:
    for name in ("MOTP_SECRET", "MOTP_PIN", "MOTP_PERIOD", "MOTP_DIGITS"):
        monkeypatch.delenv(name, raising=False)


def test_prints_code_for_fixed_time(capsys) -> None:
    rc = cli.main(["--secret", "testsecret", "--pin", "1234", "--at", str(T0)])

    assert rc == 0
    assert capsys.readouterr().out == "23fb79"


def test_short_flags(capsys) -> None:
    rc = cli.main(["-s", "testsecret", "-p", "1234", "-d", "30", "-l", "8", "--at", str(T0)])

    assert rc == 0
    assert capsys.readouterr().out == "6275ce7b"


def test_current_time(capsys, monkeypatch) -> None:
    monkeypatch.setattr(Generator, "_now", lambda self: T0 + 4)

    rc = cli.main(["-s", "testsecret", "-p", "1234"])

    assert rc == 0
    assert capsys.readouterr().out == "23fb79"


def test_env_fallback(capsys, monkeypatch) -> None:
    monkeypatch.setenv("MOTP_SECRET", "testsecret")
    monkeypatch.setenv("MOTP_PIN", "1234")
    monkeypatch.setenv("MOTP_DIGITS", "32")

    rc = cli.main(["--at", str(T0)])

    assert rc == 0
    assert capsys.readouterr().out == "23fb794e7065797672eef7ecdc00c417"


@pytest.mark.parametrize(
    "extra",
    [["--length", "0"], ["--length", "33"], ["--duration", "0"], ["--at", "-1"]],
)
def test_invalid_parameters_exit_non_zero(extra, capsys, caplog) -> None:
    with caplog.at_level(logging.ERROR, logger="motp"):
        rc = cli.main(["-s", "testsecret", "-p", "1234", *extra])

    assert rc == 1
    assert capsys.readouterr().out == ""
    assert "Error creating mOTP code" in caplog.text


def test_missing_secret_is_usage_error(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--pin", "1234"])

    assert excinfo.value.code == 2
    assert "--secret" in capsys.readouterr().err


def test_missing_pin_is_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--secret", "testsecret"])

    assert excinfo.value.code == 2


def test_version(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])

    assert excinfo.value.code == 0
    assert cli.__version__ in capsys.readouterr().out


def test_verbose_does_not_leak_secret(capsys, caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="motp"):
        rc = cli.main(["-v", "-s", "testsecret", "-p", "1234", "--at", str(T0)])

    assert rc == 0
    assert "valid for 10s" in caplog.text
    assert "testsecret" not in caplog.text


def test_verbose_level_is_restored(capsys) -> None:
    before = cli.logger.level

    assert cli.main(["-v", "-s", "testsecret", "-p", "1234", "--at", str(T0)]) == 0
    assert cli.logger.level == before

    assert cli.main(["-v", "-s", "testsecret", "-p", "1234", "--length", "0"]) == 1
    assert cli.logger.level == before


def test_env_period_fallback(capsys, monkeypatch) -> None:
    monkeypatch.setenv("MOTP_PERIOD", "30")

    rc = cli.main(["-s", "testsecret", "-p", "1234", "--at", str(T0)])

    assert rc == 0
    assert capsys.readouterr().out == "6275ce"


def test_flags_override_env(capsys, monkeypatch) -> None:
    monkeypatch.setenv("MOTP_PERIOD", "30")
    monkeypatch.setenv("MOTP_DIGITS", "8")

    rc = cli.main(["-s", "testsecret", "-p", "1234", "-d", "10", "-l", "6", "--at", str(T0)])

    assert rc == 0
    assert capsys.readouterr().out == "23fb79"


@pytest.mark.parametrize("name", ["MOTP_DIGITS", "MOTP_PERIOD"])
def test_non_numeric_env_is_usage_error(name, capsys, monkeypatch) -> None:
    monkeypatch.setenv(name, "six")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-s", "testsecret", "-p", "1234", "--at", str(T0)])

    assert excinfo.value.code == 2
    assert "invalid int value" in capsys.readouterr().err
