"""Tests for the best-effort event log and its use by the engines."""
from __future__ import annotations

import re
import tempfile
import unittest
from dataclasses import dataclass
from pathlib import Path

from bandit_engine import event_log
from bandit_engine.config import AnnealingSoftmaxConfig, BanditConfig, UcbConfig
from bandit_engine.strategies.softmax import AnnealingSoftmax
from bandit_engine.strategies.ucb import UCB


@dataclass(frozen=True)
class NumberedArm:
    num: int

    def ident(self) -> str:
        return f"arm:{self.num}"


ARMS = [NumberedArm(i) for i in range(4)]


class EventLogTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.log_path = Path(self._tmp.name) / "events.csv"
        self.bandit_config = BanditConfig(log_file=self.log_path)

    def read_log(self) -> str:
        return self.log_path.read_text(encoding="utf-8")


# ---- module API --------------------------------------------------------------


class TestEventLogModule(EventLogTestCase):
    def test_log_without_path_is_a_noop(self) -> None:
        event_log.log("SELECT;x;1", None)
        self.assertFalse(self.log_path.exists())

    def test_log_appends_lines(self) -> None:
        event_log.log("first", self.log_path)
        event_log.log("second", self.log_path)
        self.assertEqual(self.read_log(), "first\nsecond\n")

    def test_log_failure_is_reported_not_raised(self) -> None:
        target = Path(self._tmp.name) / "missing-dir" / "events.csv"
        with self.assertLogs("bandit_engine.event_log", level="WARNING") as logs:
            event_log.log("UPDATE;arm:0;1;1.0", target)
        self.assertIn("UPDATE;arm:0;1;1.0", logs.output[0])

    def test_unencodable_line_is_escaped_not_raised(self) -> None:
        event_log.log("SELECT;a\udcff;1", self.log_path)
        self.assertEqual(self.read_log(), "SELECT;a\\udcff;1\n")

    def test_invalid_path_is_reported_not_raised(self) -> None:
        with self.assertLogs("bandit_engine.event_log", level="WARNING"):
            event_log.log("SELECT;x;1", str(self.log_path) + "\x00")

    def test_log_command_formats(self) -> None:
        self.assertRegex(event_log.log_command("SELECT", ARMS[1]), r"^SELECT;arm:1;\d{13}$")
        self.assertRegex(
            event_log.log_command("UPDATE", "plain", 2.5), r"^UPDATE;plain;\d{13};2\.5$"
        )


# ---- engines -----------------------------------------------------------------


class TestUCBLogging(EventLogTestCase):
    def test_logging_update(self) -> None:
        ucb = UCB(ARMS, self.bandit_config, UcbConfig(alpha=1.0))
        for arm in ARMS:
            ucb.update(arm, 1.0)

        pattern = "".join(rf"UPDATE;arm:{i};\d{{13}};1\.0\n" for i in range(4))
        self.assertRegex(self.read_log(), re.compile(f"^{pattern}$"))

    def test_logging_select(self) -> None:
        ucb = UCB(ARMS, self.bandit_config, UcbConfig(alpha=1.0))
        selected = [ucb.select_arm() for _ in range(3)]

        pattern = "".join(rf"SELECT;{re.escape(arm.ident())};\d{{13}}\n" for arm in selected)
        self.assertRegex(self.read_log(), re.compile(f"^{pattern}$"))

    def test_split_updates_log_cumulative_reward(self) -> None:
        ucb = UCB(ARMS, self.bandit_config, UcbConfig(alpha=1.0))
        ucb.update(ARMS[0], 2.0)
        ucb.update_counts(ARMS[0])
        ucb.update_rewards(ARMS[0], 3.0)

        values = [line.split(";")[3] for line in self.read_log().splitlines()]
        self.assertEqual(values, ["2.0", "2.0", "5.0"])

    def test_unwritable_log_does_not_interrupt_update(self) -> None:
        config = BanditConfig(log_file=Path(self._tmp.name) / "missing-dir" / "events.csv")
        ucb = UCB(ARMS, config, UcbConfig(alpha=1.0))
        with self.assertLogs("bandit_engine.event_log", level="WARNING"):
            ucb.update(ARMS[0], 1.0)
        self.assertEqual(ucb.counts[ARMS[0]], 1)

    def test_unencodable_identity_does_not_interrupt_update(self) -> None:
        arm = "a\udcff"
        ucb = UCB([arm, "b"], self.bandit_config, UcbConfig(alpha=1.0))
        ucb.update(arm, 1.0)

        self.assertEqual(ucb.counts[arm], 1)
        self.assertEqual(ucb.rewards[arm], 1.0)
        self.assertRegex(self.read_log(), r"^UPDATE;a\\udcff;\d{13};1\.0\n$")


class TestSoftmaxLogging(EventLogTestCase):
    def test_update_logs_running_mean(self) -> None:
        sm = AnnealingSoftmax(ARMS, self.bandit_config, AnnealingSoftmaxConfig(cooldown_factor=0.5))
        sm.update(ARMS[1], 1.0)
        sm.update(ARMS[1], 3.0)

        lines = self.read_log().splitlines()
        self.assertEqual(len(lines), 2)
        self.assertRegex(lines[0], r"^UPDATE;arm:1;\d{13};1\.0$")
        self.assertRegex(lines[1], r"^UPDATE;arm:1;\d{13};2\.0$")

    def test_select_logs_chosen_arm(self) -> None:
        sm = AnnealingSoftmax(
            ARMS, self.bandit_config, AnnealingSoftmaxConfig(cooldown_factor=0.5), seed=5
        )
        arm = sm.select_arm()
        self.assertRegex(self.read_log(), rf"^SELECT;{arm.ident()};\d{{13}}\n$")


if __name__ == "__main__":
    unittest.main()
