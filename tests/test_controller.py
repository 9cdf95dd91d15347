from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pancakes.context import ConnectionInfo, LaunchContext
from pancakes.dispatch.controller import DispatchController
from pancakes.dispatch.errors import HandlerNotFound, LaunchFailed, NoHandlersAvailable
from pancakes.dispatch.registry import HandlerRegistry
from pancakes.shell.runner import ExecutionResult


class RecordingRunner:
    def __init__(self):
        self.calls = []
        self.last_exit_code = None

    def run(self, command, arguments=()):
        self.calls.append((command, list(arguments)))
        self.last_exit_code = 0
        return ExecutionResult(command_line=command, exit_code=0)

    def which(self, command):
        self.calls.append(("which", [command]))
        return True


class RecordingTempWriter:
    def __init__(self):
        self.writes = []

    def write(self, data, suffix=None):
        self.writes.append((data, suffix))
        return Path("/nonexistent") / f"tmp.{suffix}"


RUNS: list[tuple[str, list, dict]] = []


def launcher(label: str, aliases: tuple[str, ...], *, accept: bool | None = None):
    class Launcher:
        created = 0

        def __init__(self, context):
            type(self).created += 1
            self.context = context

        def run(self, args, options):
            RUNS.append((self.label, list(args), dict(options)))
            self.context.runner.run(f"open-{aliases[0]}")

    Launcher.label = label
    Launcher.aliases = aliases
    if accept is not None:
        Launcher.validate = lambda self, args, options: accept
    return Launcher


@pytest.fixture(autouse=True)
def _clear_runs():
    RUNS.clear()


def make_controller(*factories) -> tuple[DispatchController, RecordingRunner, RecordingTempWriter]:
    reg = HandlerRegistry()
    for f in factories:
        reg.register(f)
    runner = RecordingRunner()
    temp = RecordingTempWriter()
    ctx = LaunchContext(
        connection=ConnectionInfo(host="db.example", database="pantheon", site_label="mysite [dev]"),
        runner=runner,
        temp_writer=temp,
    )
    return DispatchController(ctx, reg), runner, temp


def standard():
    return (
        launcher("Sequel Pro", ("sequelpro", "sp")),
        launcher("MySQL Workbench", ("workbench", "wb")),
        launcher("HeidiSQL", ("heidi",)),
    )


def test_dispatch_runs_handler_named_by_alias():
    controller, runner, _ = make_controller(*standard())
    controller.dispatch(["x"], {"app": "wb"})
    assert RUNS == [("MySQL Workbench", ["x"], {"app": "wb"})]
    assert runner.calls == [("open-workbench", [])]


def test_dispatch_without_target_uses_first_and_logs_ambiguity(caplog):
    controller, _, _ = make_controller(*standard())
    with caplog.at_level(logging.DEBUG, logger="pancakes"):
        controller.dispatch([], {})
    assert RUNS[0][0] == "Sequel Pro"

    notices = [r for r in caplog.records if "Multiple applications" in r.getMessage()]
    assert len(notices) == 1
    assert notices[0].levelno == logging.INFO
    for label in ("Sequel Pro", "MySQL Workbench", "HeidiSQL"):
        assert label in notices[0].getMessage()

    messages = [r.getMessage() for r in caplog.records]
    assert "Opening mysite [dev] database in Sequel Pro." in messages
    assert any(m.startswith("Valid candidates:") for m in messages)


def test_validation_filters_candidates():
    rejecting = launcher("Sequel Pro", ("sequelpro", "sp"), accept=False)
    accepting = launcher("HeidiSQL", ("heidi",), accept=True)
    controller, _, _ = make_controller(rejecting, accepting)
    controller.dispatch([], {})
    assert [r[0] for r in RUNS] == ["HeidiSQL"]


def test_validate_receives_call_arguments():
    seen = []

    class Needy:
        label = "Needy"
        aliases = ("needy",)

        def __init__(self, context):
            pass

        def validate(self, args, options):
            seen.append((list(args), dict(options)))
            return True

        def run(self, args, options):
            pass

    controller, _, _ = make_controller(Needy)
    controller.dispatch(["select 1"], {"app": None})
    assert seen == [(["select 1"], {"app": None})]


def test_no_candidates_fails_before_any_side_effect():
    controller, runner, temp = make_controller(
        launcher("Sequel Pro", ("sp",), accept=False),
        launcher("HeidiSQL", ("heidi",), accept=False),
    )
    with pytest.raises(NoHandlersAvailable):
        controller.dispatch([], {})
    assert RUNS == []
    assert runner.calls == []
    assert temp.writes == []


def test_empty_registry_fails_with_no_handlers():
    controller, _, _ = make_controller()
    with pytest.raises(NoHandlersAvailable):
        controller.dispatch([], {})


def test_unknown_target_lists_validated_candidates_only():
    controller, runner, _ = make_controller(
        launcher("Sequel Pro", ("sequelpro", "sp")),
        launcher("MySQL Workbench", ("workbench", "wb"), accept=False),
        launcher("HeidiSQL", ("heidi",)),
    )
    with pytest.raises(HandlerNotFound) as ei:
        controller.dispatch([], {"app": "dbeaver"})
    msg = ei.value.message
    assert msg.count("Sequel Pro") == 1
    assert msg.count("HeidiSQL") == 1
    assert "sequelpro" in msg and "sp" in msg and "heidi" in msg
    assert "Workbench" not in msg
    assert runner.calls == []


def test_handlers_are_constructed_fresh_per_dispatch():
    first = launcher("HeidiSQL", ("heidi",))
    controller, _, _ = make_controller(first)
    controller.dispatch([], {})
    controller.dispatch([], {})
    assert first.created == 2


def test_repeated_dispatch_selects_the_same_handler():
    controller, _, _ = make_controller(*standard())
    controller.dispatch([], {})
    controller.dispatch([], {})
    assert [r[0] for r in RUNS] == ["Sequel Pro", "Sequel Pro"]


def test_handler_errors_propagate_unwrapped():
    boom = LaunchFailed(code="LAUNCH_FAILED", message="nope")

    class Broken:
        label = "Broken"
        aliases = ("broken",)

        def __init__(self, context):
            pass

        def run(self, args, options):
            raise boom

    controller, _, _ = make_controller(Broken)
    with pytest.raises(LaunchFailed) as ei:
        controller.dispatch([], {"app": "broken"})
    assert ei.value is boom


def test_function_factories_are_always_eligible():
    reg = HandlerRegistry()
    made = []

    class Thing:
        label = "Thing"
        aliases = ("thing",)

        def run(self, args, options):
            made.append(self)

    def factory(context):
        return Thing()

    reg.register(factory, label="Thing")
    ctx = LaunchContext(connection=ConnectionInfo())
    DispatchController(ctx, reg).dispatch([], {})
    assert len(made) == 1
