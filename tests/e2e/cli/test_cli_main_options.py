"""End-to-end tests for the top-level `eventsite` command.

Exercise verbosity flags, logger-level overrides, debug formatting and the
flight recorder by running the `log-demo` command under various options.
"""

import re
from pathlib import Path

import pytest

from eventsite import __version__, config
from eventsite.entrypoints.cli.main import eventsite

# pylint: disable=unused-argument


def assert_in_output(pattern: str, output: str) -> None:
    if not re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' not found in output:\n{output}")


def assert_not_in_output(pattern: str, output: str) -> None:
    if re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' found in output:\n{output}")


def test_version(runner):
    result = runner.invoke(eventsite, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_groups(runner):
    result = runner.invoke(eventsite, ["--help"])
    assert result.exit_code == 0
    assert_in_output(r"\bdb\b", result.output)
    assert_in_output(r"\bevents\b", result.output)


def test_default_shows_warning(registered_log_demo, runner, fs):
    """Default invocation shows WARNING and above but not INFO."""
    result = runner.invoke(eventsite, ["log-demo"])
    assert result.exit_code == 0
    assert_in_output("This is a warning-level test message.", result.output)
    assert_not_in_output("This is an info-level test message.", result.output)


@pytest.mark.parametrize(
    "flags,shown,hidden",
    [
        (["-v"], "info-level test", "debug-level test"),
        (["-vv"], "debug-level test", None),
        (["-q"], "error-level test", "warning-level test"),
        (["-qq"], "critical-level test", "error-level test"),
    ],
)
def test_verbosity(registered_log_demo, runner, fs, flags, shown, hidden):
    result = runner.invoke(eventsite, flags + ["log-demo"])
    assert result.exit_code == 0
    assert_in_output(shown, result.output)
    if hidden:
        assert_not_in_output(hidden, result.output)


def test_logger_level_silences_debug(registered_log_demo, runner, fs):
    """-L keeps a noisy library at INFO even under -vv."""
    result = runner.invoke(eventsite, ["-vv", "-L", "some.thirdparty=INFO", "log-demo"])
    assert result.exit_code == 0
    assert_not_in_output("debug-level third-party", result.output)
    assert_in_output("info-level third-party", result.output)


def test_debug_mode_shows_paths(registered_log_demo, runner, fs):
    result = runner.invoke(eventsite, ["--debug", "log-demo"])
    assert result.exit_code == 0
    assert_in_output(r"conftest\.py:\d+\b", result.output)


def test_flight_recorder_flush_on_warning(registered_log_demo, runner, fs):
    """Buffered DEBUG records reach the file once a WARNING is logged."""
    result = runner.invoke(
        eventsite, ["--log-path", "fr.log", "-L", "some.thirdparty=INFO", "log-demo"]
    )
    assert result.exit_code == 0
    content = Path("fr.log").read_text(encoding="utf-8")
    assert_in_output("This is a debug-level test message.", content)
    assert_in_output("This is a critical-level test message.", content)
    assert_not_in_output("debug-level third-party", content)
    # nothing after the last flush-triggering record is written
    assert_not_in_output("This is a final debug-level test message.", content)


def test_flight_recorder_force_flush(registered_log_demo, runner, fs):
    result = runner.invoke(
        eventsite, ["--log-path", "fr.log", "--force-flush", "log-demo"]
    )
    assert result.exit_code == 0
    content = Path("fr.log").read_text(encoding="utf-8")
    assert_in_output("This is a final debug-level test message.", content)


def test_flight_recorder_can_be_disabled(registered_log_demo, runner, fs):
    result = runner.invoke(
        eventsite, ["--log-path", "fr.log", "--no-flight-recorder", "log-demo"]
    )
    assert result.exit_code == 0
    assert not Path("fr.log").exists()


def test_startup_logging(registered_log_demo, runner, fs):
    result = runner.invoke(
        eventsite, ["--log-path", "fr.log", "--force-flush", "log-demo"],
        env={config.ENV_ENVVAR: "test"},
    )
    assert result.exit_code == 0
    content = Path("fr.log").read_text(encoding="utf-8")
    assert_in_output(rf"EVENTSITE {re.escape(__version__)} \(test\)", content)
    assert_in_output("SQLAlchemy: ", content)


def test_invalid_env_is_reported(registered_log_demo, runner, fs):
    result = runner.invoke(
        eventsite, ["--no-flight-recorder", "log-demo"], env={config.ENV_ENVVAR: "qa"}
    )
    assert result.exit_code == 1
    assert config.ENV_ENVVAR in result.output
