"""
Tests for fixer/executor.py.

Covers:
  - SubprocessRunner:   exit codes, captured output, launch failure, signals
  - DryRunRunner:       records argv, never executes
  - escalation adapters and escalation_for()
"""

import pytest

from compfix.errors import ConfigError, ExecutionFailure
from compfix.fixer import executor
from compfix.fixer.executor import (
    CommandResult,
    DryRunRunner,
    NoEscalation,
    OsascriptEscalation,
    SubprocessRunner,
    SudoEscalation,
    escalation_for,
)


# ── CommandResult ─────────────────────────────────────────────────────────────

class TestCommandResult:
    def test_zero_is_ok(self):
        assert CommandResult(["true"], 0).ok is True

    def test_nonzero_is_not_ok(self):
        r = CommandResult(["false"], 1)
        assert r.ok is False
        assert r.signalled is False

    def test_negative_means_signalled(self):
        r = CommandResult(["sleep"], -9)
        assert r.signalled is True
        assert r.ok is False


# ── SubprocessRunner ──────────────────────────────────────────────────────────

class TestSubprocessRunner:
    def test_successful_command(self):
        result = SubprocessRunner().run(["true"])
        assert result.returncode == 0
        assert result.argv == ["true"]

    def test_failing_command_returns_exit_code(self):
        # `false` is a POSIX command that always exits 1
        assert SubprocessRunner().run(["false"]).returncode == 1

    def test_capture_collects_stdout_and_stderr_as_bytes(self):
        result = SubprocessRunner().run(
            ["sh", "-c", "echo out; echo err >&2"], capture=True
        )
        assert result.stdout == b"out\n"
        assert result.stderr == b"err\n"

    def test_uncaptured_streams_are_empty(self):
        result = SubprocessRunner().run(["true"])
        assert result.stdout == b""
        assert result.stderr == b""

    def test_missing_binary_raises_execution_failure(self):
        with pytest.raises(ExecutionFailure) as exc:
            SubprocessRunner().run(["compfix-definitely-not-a-real-binary"])
        assert exc.value.returncode is None
        assert exc.value.argv == ["compfix-definitely-not-a-real-binary"]
        assert "compfix-definitely-not-a-real-binary" in str(exc.value)

    def test_signal_termination_is_negative(self):
        result = SubprocessRunner().run(["sh", "-c", "kill -TERM $$"])
        assert result.returncode == -15
        assert result.signalled

    def test_path_arguments_are_stringified(self, tmp_path):
        result = SubprocessRunner().run(["test", "-d", tmp_path])
        assert result.ok
        assert result.argv == ["test", "-d", str(tmp_path)]


# ── DryRunRunner ──────────────────────────────────────────────────────────────

class TestDryRunRunner:
    def test_records_calls_in_order(self):
        runner = DryRunRunner()
        runner.run(["chmod", "-R", "g-w", "/a"])
        runner.run(["chmod", "-R", "o-w", "/a"])
        assert runner.calls == [
            ["chmod", "-R", "g-w", "/a"],
            ["chmod", "-R", "o-w", "/a"],
        ]

    def test_reports_success_without_running(self, tmp_path):
        marker = tmp_path / "marker"
        result = DryRunRunner().run(["touch", str(marker)])
        assert result.ok
        assert not marker.exists()


# ── Escalation ────────────────────────────────────────────────────────────────

class TestEscalation:
    def test_sudo_prefixes_command(self):
        assert SudoEscalation().wrap(["chown", "-R", "me", "/p"]) == [
            "sudo", "chown", "-R", "me", "/p",
        ]

    def test_sudo_program_is_configurable(self):
        assert SudoEscalation("doas").wrap(["chown"]) == ["doas", "chown"]

    def test_none_leaves_command_alone(self):
        assert NoEscalation().wrap(["chown", "-R", "me", "/p"]) == ["chown", "-R", "me", "/p"]

    def test_osascript_builds_administrator_script(self):
        argv = OsascriptEscalation().wrap(["chown", "-R", "me", "/Library/My Dir"])
        assert argv[:2] == ["osascript", "-e"]
        assert argv[2] == (
            "do shell script \"chown -R me '/Library/My Dir'\" with administrator privileges"
        )

    def test_osascript_escapes_double_quotes(self):
        argv = OsascriptEscalation().wrap(["chown", "me", 'odd"name'])
        assert '\\"' in argv[2]


class TestEscalationFor:
    @pytest.mark.parametrize("name, cls", [
        ("sudo", SudoEscalation),
        ("osascript", OsascriptEscalation),
        ("none", NoEscalation),
        ("  SUDO ", SudoEscalation),
    ])
    def test_named_escalations(self, name, cls):
        assert isinstance(escalation_for(name), cls)

    def test_auto_as_root_needs_no_escalation(self, monkeypatch):
        monkeypatch.setattr(executor.os, "geteuid", lambda: 0)
        assert isinstance(escalation_for("auto"), NoEscalation)

    def test_auto_as_user_uses_sudo(self, monkeypatch):
        monkeypatch.setattr(executor.os, "geteuid", lambda: 501)
        assert isinstance(escalation_for("auto"), SudoEscalation)

    def test_unknown_name_raises_config_error(self):
        with pytest.raises(ConfigError, match="pkexec"):
            escalation_for("pkexec")
