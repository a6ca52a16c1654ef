import json
import os
import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from duel.cli import app
from duel.core.audit import append_audit
from duel.core.config import DEFAULT_LOG_PATH, DuelSettings, load_settings, resolve_config_path
from duel.core.errors import ConfigError


runner = CliRunner()


def _json_from(output: str) -> dict:
    return json.loads(output[output.index("{") :])


class CliTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.log = self.tmp / "runs.jsonl"
        self.config = self.tmp / "duel.yaml"
        self.config.write_text("sampling:\n  max_attempts: 5000\n", encoding="utf-8")

    def tearDown(self):
        self._tmp.cleanup()

    def _run(self, *args):
        return runner.invoke(
            app,
            ["run", *args, "--log", str(self.log), "--config", str(self.config)],
        )

    def test_run_prints_and_logs_result(self):
        result = self._run("-x", "10", "-y", "2", "-z", "1", "--seed", "42")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("challenges=10 prime_likelihood=2 vowel_likelihood=1 seed=42", result.output)

        data = _json_from(result.output)
        self.assertEqual(set(data), {"letters", "numbers"})
        self.assertEqual(data["letters"]["wins"] + data["numbers"]["wins"], 10)

        lines = self.log.read_text(encoding="utf-8").splitlines()
        self.assertEqual(len(lines), 1)
        event = json.loads(lines[0])
        self.assertEqual(event["event"], "duel_run")
        self.assertEqual(event["seed"], 42)
        self.assertEqual(event["result"], data)
        self.assertTrue(event["ts"].endswith("Z"))

    def test_seeded_runs_repeat(self):
        first = self._run("-x", "30", "-y", "3", "-z", "2", "--seed", "7")
        second = self._run("-x", "30", "-y", "3", "-z", "2", "--seed", "7")
        self.assertEqual(_json_from(first.output), _json_from(second.output))

    def test_show_pools(self):
        result = self._run("-x", "5", "-y", "1", "-z", "1", "--seed", "1", "--show-pools")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Challenge Pairs", result.output)

    def test_zero_value_is_rejected(self):
        result = self._run("-x", "0", "-y", "2", "-z", "1")
        self.assertNotEqual(result.exit_code, 0)
        self.assertFalse(self.log.exists())

    def test_missing_value_is_rejected(self):
        result = self._run("-x", "10", "-y", "2")
        self.assertNotEqual(result.exit_code, 0)
        self.assertFalse(self.log.exists())

    def test_help(self):
        result = runner.invoke(app, ["run", "--help"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("--challenges", result.output)

    def test_quotas(self):
        result = runner.invoke(app, ["quotas", "-x", "10", "-y", "2", "-z", "2", "--config", str(self.config)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("consonants", result.output)

    def test_bad_config(self):
        self.config.write_text("sampling:\n  max_attempts: 0\n", encoding="utf-8")
        result = self._run("-x", "10", "-y", "2", "-z", "1")
        self.assertEqual(result.exit_code, 3)

    def test_unparseable_config(self):
        self.config.write_text("sampling: [\n", encoding="utf-8")
        result = self._run("-x", "5", "-y", "1", "-z", "1")
        self.assertEqual(result.exit_code, 3)
        self.assertIn("❌", result.output)
        self.assertFalse(self.log.exists())

    def test_config_section_not_a_mapping(self):
        self.config.write_text("sampling: 5\n", encoding="utf-8")
        result = self._run("-x", "5", "-y", "1", "-z", "1")
        self.assertEqual(result.exit_code, 3)
        self.assertIn("❌", result.output)

    def test_unsettled_quota_fails_cleanly(self):
        self.config.write_text("sampling:\n  rebalance_max_iterations: 1\n", encoding="utf-8")
        result = self._run("-x", "7", "-y", "1", "-z", "5", "--seed", "1")
        self.assertEqual(result.exit_code, 3)
        self.assertIn("❌", result.output)
        self.assertFalse(self.log.exists())

    def test_unwritable_log_still_prints_result(self):
        result = runner.invoke(
            app,
            ["run", "-x", "10", "-y", "2", "-z", "1", "--seed", "4", "--log", str(self.tmp), "--config", str(self.config)],
        )
        self.assertEqual(result.exit_code, 3)
        self.assertIn("❌", result.output)
        self.assertIn('"letters"', result.output)


class SettingsTests(unittest.TestCase):
    def test_defaults_without_file(self):
        self.assertEqual(load_settings(None), DuelSettings())
        self.assertEqual(DuelSettings().log_path, DEFAULT_LOG_PATH)

    def test_load_and_resolve_log_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "duel.yaml"
            path.write_text(
                "sampling:\n  max_attempts: 50\n  rebalance_max_iterations: 8\n  seed: 3\n"
                "log:\n  path: logs/runs.jsonl\n",
                encoding="utf-8",
            )
            settings = load_settings(path)
            self.assertEqual(settings.max_attempts, 50)
            self.assertEqual(settings.rebalance_max_iterations, 8)
            self.assertEqual(settings.seed, 3)
            self.assertEqual(Path(settings.log_path), (Path(tmp) / "logs" / "runs.jsonl").resolve())

    def test_invalid_values(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "duel.yaml"
            path.write_text("sampling:\n  seed: abc\n", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_settings(path)
            path.write_text("- just\n- a list\n", encoding="utf-8")
            with self.assertRaises(ConfigError):
                load_settings(path)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_settings("/nonexistent/duel.yaml")

    def test_env_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "custom.yaml"
            path.write_text("{}\n", encoding="utf-8")
            old = os.environ.get("DUEL_CONFIG")
            os.environ["DUEL_CONFIG"] = str(path)
            try:
                self.assertEqual(resolve_config_path(None), path)
            finally:
                if old is None:
                    del os.environ["DUEL_CONFIG"]
                else:
                    os.environ["DUEL_CONFIG"] = old

    def test_append_audit(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "runs.jsonl"
            append_audit({"event": "a"}, path=str(path))
            append_audit({"event": "b"}, path=str(path))
            events = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
            self.assertEqual([e["event"] for e in events], ["a", "b"])
            self.assertTrue(all("ts" in e for e in events))


if __name__ == "__main__":
    unittest.main()
