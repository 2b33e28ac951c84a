"""Smoke tests for the console runner."""

import pytest

import main


class TestConsoleRunner:
    def test_prints_levels_after_each_event(self, capsys):
        assert main.main(["--steps", "3", "--seed", "4"]) == 0

        out = capsys.readouterr().out
        assert "INITIAL STOCK:" in out
        assert out.count("event: ") == 3
        assert "Machine 001 has stock level of" in out
        assert "Events published: 3" in out

    def test_low_stock_summary(self, capsys):
        main.main(["--steps", "0", "--stock", "2"])
        out = capsys.readouterr().out
        assert "Machines below 3 units: 001, 002, 003" in out

    def test_negative_steps_rejected(self):
        with pytest.raises(SystemExit):
            main.parse_args(["--steps", "-1"])
