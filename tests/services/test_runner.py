"""Tests for PomodoroRunner: phase cycling, termination and the exit summary."""

from __future__ import annotations

import pytest

from pmon_cli.models.accounting import Summary
from pmon_cli.models.cycling import Phase, TimerSettings
from pmon_cli.services.runner import PomodoroRunner, TerminationRequested

STANDARD = TimerSettings.from_minutes(4, 25, 5, 30)


def _runner(renderer, clock, settings=STANDARD):
    return PomodoroRunner(settings, renderer, clock=clock, sleep=clock.sleep)


class TestCycling:
    def test_four_sessions_lead_to_long_break(self, clock, renderer):
        runner = _runner(renderer, clock)

        runner.run(max_phases=7)

        assert runner.state.phase is Phase.LONG_BREAK
        assert runner.state.cycle_count == 4
        assert runner.state.accumulated_work_seconds == 4 * 1500
        assert runner.state.accumulated_break_seconds == 3 * 300

    def test_long_break_resets_cycle(self, clock, renderer):
        runner = _runner(renderer, clock)

        summary = runner.run(max_phases=8)

        assert runner.state.phase is Phase.WORK
        assert runner.state.cycle_count == 0
        assert summary == Summary(6000, 3 * 300 + 1800)
        assert clock.now == 6000 + 900 + 1800

    def test_phase_order_in_notifications(self, clock, renderer):
        runner = _runner(renderer, clock, TimerSettings(2, 2, 1, 3))

        runner.run(max_phases=5)

        phases = []
        for update in renderer.updates:
            if not phases or phases[-1] is not update.phase:
                phases.append(update.phase)
        assert phases == [
            Phase.WORK,
            Phase.SHORT_BREAK,
            Phase.WORK,
            Phase.LONG_BREAK,
            Phase.WORK,
        ]


class TestTermination:
    def test_terminate_mid_work_reports_partial_time(self, clock, renderer):
        runner = _runner(renderer, clock)
        clock.at(600, runner.terminate)

        summary = runner.run()

        assert summary == Summary(total_work_seconds=600, total_break_seconds=0)
        assert renderer.summaries == [
            "Time Studying: 0 hrs 10 mins 0 secs\nTime On Break: 0 hrs 0 mins 0 secs"
        ]
        assert renderer.closed

    def test_terminate_during_break_adds_to_break_total(self, clock, renderer):
        runner = _runner(renderer, clock)
        clock.at(1500 + 120, runner.terminate)

        summary = runner.run()

        assert summary == Summary(1500, 120)

    def test_keyboard_interrupt_is_treated_as_termination(self, clock, renderer):
        runner = _runner(renderer, clock)

        def interrupt():
            raise KeyboardInterrupt

        clock.at(30, interrupt)

        assert runner.run() == Summary(30, 0)
        assert renderer.closed

    def test_terminate_raises_while_running(self, clock, renderer):
        runner = _runner(renderer, clock)

        with pytest.raises(TerminationRequested) as exc_info:
            runner.terminate(15)

        assert exc_info.value.signum == 15

    def test_terminate_ignored_once_stopping(self, clock, renderer):
        runner = _runner(renderer, clock)
        clock.at(5, runner.terminate)
        runner.run()

        assert runner.terminate(2) is None

    def test_second_terminate_during_shutdown_keeps_summary(
        self, clock, renderer, monkeypatch
    ):
        runner = _runner(renderer, clock)
        clock.at(600, runner.terminate)
        log_info = runner.logger.info

        def info(msg, *args):
            log_info(msg, *args)
            if msg.startswith("run terminated"):
                runner.terminate(2)

        monkeypatch.setattr(runner.logger, "info", info)

        summary = runner.run()

        assert summary == Summary(600, 0)
        assert len(renderer.summaries) == 1
        assert renderer.closed

    def test_first_terminate_blocks_later_ones(self, clock, renderer):
        runner = _runner(renderer, clock)

        with pytest.raises(TerminationRequested):
            runner.terminate(2)

        assert runner.terminate(15) is None

    def test_finish_shows_summary_without_running(self, clock, renderer):
        runner = _runner(renderer, clock)

        assert runner.finish() == Summary(0, 0)
        assert renderer.summaries == [
            "Time Studying: 0 hrs 0 mins 0 secs\nTime On Break: 0 hrs 0 mins 0 secs"
        ]
        assert runner.terminate(2) is None

    def test_pause_then_terminate(self, clock, renderer):
        runner = _runner(renderer, clock)
        clock.at(60, runner.toggle_pause)
        clock.at(4000, runner.terminate)

        assert runner.run() == Summary(60, 0)


def test_renderer_closed_on_unexpected_error(clock):
    class Exploding:
        closed = False

        def render(self, update):
            raise RuntimeError("disk full")

        def show_summary(self, text):
            raise AssertionError("no summary on crash")

        def close(self):
            self.closed = True

    renderer = Exploding()
    runner = PomodoroRunner(STANDARD, renderer, clock=clock, sleep=clock.sleep)

    with pytest.raises(RuntimeError, match="disk full"):
        runner.run()
    assert renderer.closed


def test_summary_callable_at_any_time(clock, renderer):
    runner = _runner(renderer, clock)

    assert runner.summary() == Summary(0, 0)
