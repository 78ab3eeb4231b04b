import csv
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from causal_sim.config import DEFAULT_DAMPING, DEFAULT_DT, DEFAULT_MAX_STEPS, DEFAULT_STEPS, load_config
from causal_sim.export import write_loops_csv, write_time_series_csv
from causal_sim.graph.loops import detect_cycles
from causal_sim.graph.model import Edge
from causal_sim.types import Snapshot


class ConfigTestCase(unittest.TestCase):
    def test_environment_overrides(self):
        env = {
            "CAUSAL_SIM_STEPS": "8",
            "CAUSAL_SIM_DT": "0.5",
            "CAUSAL_SIM_DAMPING": "0.1",
            "CAUSAL_SIM_PORT": "8080",
            "CAUSAL_SIM_MAX_STEPS": "200",
        }
        with mock.patch.dict(os.environ, env):
            cfg = load_config()
        self.assertEqual(cfg.steps, 8)
        self.assertEqual(cfg.dt, 0.5)
        self.assertEqual(cfg.damping, 0.1)
        self.assertEqual(cfg.port, 8080)
        self.assertEqual(cfg.max_steps, 200)
        self.assertEqual(cfg.simulation_defaults(), {"steps": 8, "dt": 0.5, "damping": 0.1})

    def test_invalid_values_fall_back(self):
        env = {
            "CAUSAL_SIM_STEPS": "-2",
            "CAUSAL_SIM_DT": "fast",
            "CAUSAL_SIM_DAMPING": "nan",
        }
        with mock.patch.dict(os.environ, env):
            with self.assertLogs("causal_sim.config", level="WARNING"):
                cfg = load_config()
        self.assertEqual(cfg.steps, DEFAULT_STEPS)
        self.assertEqual(cfg.dt, DEFAULT_DT)
        self.assertEqual(cfg.damping, DEFAULT_DAMPING)

    def test_invalid_max_steps_falls_back(self):
        for raw in ("4", "lots"):
            with self.subTest(raw=raw):
                with mock.patch.dict(os.environ, {"CAUSAL_SIM_STEPS": "16", "CAUSAL_SIM_MAX_STEPS": raw}):
                    with self.assertLogs("causal_sim.config", level="WARNING"):
                        cfg = load_config()
                self.assertEqual(cfg.max_steps, DEFAULT_MAX_STEPS)


class ExportTestCase(unittest.TestCase):
    def test_time_series_columns_follow_first_appearance(self):
        series = [
            Snapshot(step=0, values={"A": 1.0, "B": 2.0}),
            Snapshot(step=1, values={"A": 1.5, "B": 2.5}),
        ]
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "series.csv"
            self.assertEqual(write_time_series_csv(series, path), 2)
            with open(path, newline="", encoding="utf-8") as f:
                rows = list(csv.reader(f))
        self.assertEqual(rows, [["step", "A", "B"], ["0", "1.0", "2.0"], ["1", "1.5", "2.5"]])

    def test_loops_csv(self):
        loops = detect_cycles([Edge("A", "B", 0.5), Edge("B", "A", -0.25)])
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "loops.csv"
            self.assertEqual(write_loops_csv(loops, path), 1)
            with open(path, newline="", encoding="utf-8") as f:
                rows = list(csv.DictReader(f))
        self.assertEqual(rows[0]["loop_id"], "L01")
        self.assertEqual(rows[0]["type"], "Balancing")
        self.assertEqual(rows[0]["dominance"], "75")
        self.assertEqual(rows[0]["length"], "2")
        self.assertEqual(rows[0]["weights"], "0.5; -0.25")


if __name__ == "__main__":
    unittest.main()
