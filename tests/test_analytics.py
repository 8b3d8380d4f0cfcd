import tempfile
import unittest
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pandas as pd  # noqa: E402

from analytics import (  # noqa: E402
    AnalyticsConfig,
    compute_metrics,
    ewma_by_session,
    export_history,
    history_frame,
    plot_duration,
    plot_history,
)
from quizrunner.storage.schema import HistoryEntry  # noqa: E402


def entries():
    rows = [
        {"date": "d1", "score": 1, "total": 2, "accuracy": "50.00"},
        {"date": "d2", "score": 3, "total": 4, "accuracy": "75.00", "duration": 40},
        {"date": "d3", "score": 5, "total": 5, "accuracy": "100.00", "duration": 80},
    ]
    return [HistoryEntry.model_validate(r) for r in rows]


class HistoryFrameTests(unittest.TestCase):
    def test_columns_and_values(self) -> None:
        df = history_frame(entries())
        self.assertEqual(list(df.columns), ["session_idx", "date", "score", "total", "accuracy", "duration"])
        self.assertEqual(df["session_idx"].tolist(), [1, 2, 3])
        self.assertEqual(df["accuracy"].tolist(), [50.0, 75.0, 100.0])
        self.assertEqual(df["duration"].tolist(), [0, 40, 80])

    def test_empty(self) -> None:
        df = history_frame([])
        self.assertTrue(df.empty)
        self.assertIn("accuracy", df.columns)


class MetricsTests(unittest.TestCase):
    def test_metrics(self) -> None:
        m = compute_metrics(history_frame(entries()), AnalyticsConfig(target_accuracy=75))
        self.assertEqual(m["sessions"], 3)
        self.assertEqual(m["questions_attempted"], 11)
        self.assertEqual(m["mean_accuracy"], 75.0)
        self.assertEqual(m["best_accuracy"], 100.0)
        self.assertEqual(m["last_accuracy"], 100.0)
        self.assertEqual(m["mean_duration_s"], 40.0)
        self.assertAlmostEqual(m["on_target_share"], 0.667)
        self.assertAlmostEqual(m["trend"], 25.0)

    def test_metrics_on_empty_history(self) -> None:
        m = compute_metrics(history_frame([]), AnalyticsConfig())
        self.assertEqual(m["sessions"], 0)
        self.assertEqual(m["trend"], 0.0)

    def test_config_from_app_config(self) -> None:
        cfg = AnalyticsConfig.from_config({"analytics": {"smoothing_span": 3, "target_accuracy": 80}})
        self.assertEqual(cfg.smoothing_span, 3)
        self.assertEqual(cfg.target_accuracy, 80.0)


class SmoothingTests(unittest.TestCase):
    def test_ewma_adds_column(self) -> None:
        df = ewma_by_session(history_frame(entries()), "accuracy", span=2)
        self.assertIn("accuracy_smooth", df.columns)
        self.assertEqual(df["accuracy_smooth"].iloc[0], 50.0)
        smooth = df["accuracy_smooth"].tolist()
        self.assertTrue(smooth[0] < smooth[1] < smooth[2] <= 100.0)


class PlotAndExportTests(unittest.TestCase):
    def test_plots_are_written(self) -> None:
        df = ewma_by_session(history_frame(entries()), "accuracy", span=2)
        with tempfile.TemporaryDirectory() as d:
            acc = Path(d) / "acc.png"
            dur = Path(d) / "dur.png"
            self.assertTrue(plot_history(df, target=70, save_path=acc))
            self.assertTrue(plot_duration(df, save_path=dur))
            self.assertGreater(acc.stat().st_size, 0)
            self.assertGreater(dur.stat().st_size, 0)

    def test_no_plot_for_empty_history(self) -> None:
        self.assertFalse(plot_history(history_frame([])))

    def test_export_ndjson(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            out = export_history(history_frame(entries()), Path(d) / "h.ndjson")
            lines = out.read_text(encoding="utf-8").strip().splitlines()
        self.assertEqual(len(lines), 3)

    def test_export_parquet(self) -> None:
        df = history_frame(entries())
        with tempfile.TemporaryDirectory() as d:
            out = export_history(df, Path(d) / "h.parquet")
            back = pd.read_parquet(out)
        self.assertEqual(back["accuracy"].tolist(), [50.0, 75.0, 100.0])


if __name__ == "__main__":
    unittest.main()
