"""Tests for the input multiplexer."""

from __future__ import annotations

import pytest

from httop.models import Command, SortKey
from httop.multiplexer import InputMultiplexer, classify
from tests.conftest import SAMPLE_LINES, SCENARIO_LINES


class TestClassify:

    @pytest.mark.parametrize("char", list("spciu+-q"))
    def test_command_characters(self, char):
        assert classify(char) is Command(char)
        assert classify(char + "\n") is Command(char)

    @pytest.mark.parametrize("line", ["S", "x", " s", "s ", "ss", "q!", "", "\n", SCENARIO_LINES[0]])
    def test_everything_else_is_data(self, line):
        assert classify(line) is None


class TestInputMultiplexer:

    def test_end_to_end_scenario(self, multiplexer, aggregator, controller):
        multiplexer.run([line + "\n" for line in SCENARIO_LINES] + ["c\n"])

        assert multiplexer.eof_event.is_set()
        assert controller.state.sort_key is SortKey.COUNT

        rows = aggregator.snapshot(controller.state.sort_key, 10)
        assert [(tuple(key), entry.count) for key, entry in rows] == [
            (("10.0.0.1", 200, "/a", "UA1"), 2),
            (("10.0.0.2", 404, "/b", "UA2"), 1),
        ]
        stats = aggregator.stats()
        assert stats.total_requests == 3
        assert stats.total_bytes == 250
        assert stats.status_histogram == {200: 2, 404: 1}

    def test_commands_interleaved_with_data(self, multiplexer, aggregator, controller):
        multiplexer.run([SCENARIO_LINES[0], "p\n", SCENARIO_LINES[1], "+\n", "+\n", "-\n"])
        assert controller.state.sort_key is SortKey.PATH
        assert controller.state.row_limit == 25
        assert aggregator.stats().total_requests == 2

    def test_rejected_lines_are_dropped(self, multiplexer, aggregator):
        multiplexer.feed(SCENARIO_LINES[0])
        before = aggregator.snapshot(SortKey.COUNT, 10)

        for name in ("missing_quotes", "status_text", "status_too_high", "bytes_dash", "syslog"):
            assert multiplexer.feed(SAMPLE_LINES[name]) is True

        assert multiplexer.dropped == 5
        stats = aggregator.stats()
        assert stats.dropped_lines == 5
        assert stats.total_requests == 1
        assert aggregator.snapshot(SortKey.COUNT, 10) == before

    def test_dropped_reads_aggregator_total(self, multiplexer, aggregator):
        multiplexer.feed(SAMPLE_LINES["syslog"])
        aggregator.record_drop()
        assert multiplexer.dropped == aggregator.stats().dropped_lines == 2

    def test_blank_lines_ignored(self, multiplexer, aggregator):
        multiplexer.run(["\n", "   \n", ""])
        assert multiplexer.dropped == 0
        assert aggregator.stats().dropped_lines == 0

    def test_quit_stops_reading(self, multiplexer, aggregator):
        lines = iter([SCENARIO_LINES[0], "q\n", SCENARIO_LINES[1], SCENARIO_LINES[2]])
        multiplexer.run(lines)

        assert multiplexer.stop_event.is_set()
        assert not multiplexer.eof_event.is_set()
        assert aggregator.stats().total_requests == 1
        assert next(lines) == SCENARIO_LINES[1]

    def test_external_stop(self, multiplexer, aggregator):
        multiplexer.stop_event.set()
        multiplexer.run(SCENARIO_LINES)
        assert aggregator.stats().total_requests == 0

    def test_commands_only_ignores_data(self, aggregator, controller):
        commands = InputMultiplexer(aggregator, controller, commands_only=True)
        commands.run([SCENARIO_LINES[0], "i\n", SAMPLE_LINES["syslog"]])
        assert controller.state.sort_key is SortKey.IP
        stats = aggregator.stats()
        assert stats.total_requests == 0
        assert stats.dropped_lines == 0
