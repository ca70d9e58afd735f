"""
Tests for KenoModel orchestration and the export script.
Run with: pytest tests/test_keno_model.py -v
"""

import importlib.util
from pathlib import Path

import numpy as np
import pytest
from openpyxl import load_workbook

from keno_analyzer.core.game_config import KenoConfig
from keno_analyzer.core.sink_interface import InMemoryTabularSink
from keno_analyzer.keno_model import KenoAnalysis, KenoModel
from keno_analyzer.services.export import (
    EXPECTED_VALUE_SHEET,
    PROBABILITY_SHEET,
    ExcelTabularSink,
)

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "export_keno.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("export_keno", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def analysis():
    return KenoModel().analyze()


class TestKenoModel:
    """End-to-end analysis"""

    def test_defaults_to_standard_game(self):
        assert KenoModel().config.total_balls == 80

    def test_returns_analysis(self, analysis):
        assert isinstance(analysis, KenoAnalysis)
        assert analysis.probability_matrix.shape == (20, 21)
        assert analysis.expected_values.shape == (9,)

    def test_results_read_only(self, analysis):
        with pytest.raises(ValueError):
            analysis.probability_matrix[0, 0] = 0.0
        with pytest.raises(ValueError):
            analysis.expected_values[0] = 0.0

    def test_summary(self, analysis):
        summary = analysis.summary()
        assert sorted(summary) == list(range(1, 10))
        assert summary[1]["expected_value"] == pytest.approx(0.375)
        assert summary[1]["house_edge"] == pytest.approx(0.625)

    def test_best_spot_count(self, analysis):
        best = analysis.best_spot_count()
        assert analysis.expected_values[best - 1] == analysis.expected_values.max()

    def test_deterministic(self, analysis):
        again = KenoModel().analyze()
        np.testing.assert_array_equal(again.probability_matrix, analysis.probability_matrix)
        np.testing.assert_array_equal(again.expected_values, analysis.expected_values)

    def test_custom_config(self):
        cfg = KenoConfig(
            name="Mini Keno",
            total_balls=40,
            balls_drawn=10,
            max_spots=10,
            payout_table=((2.0,),),
        )
        analysis = KenoModel(cfg).analyze()
        assert analysis.probability_matrix.shape == (10, 11)
        assert analysis.expected_values[0] == pytest.approx(0.25 * 2.0 / 2)

    def test_export_closes_sink(self, analysis):
        sink = InMemoryTabularSink()
        KenoModel().export(analysis, sink)
        assert sink.closed
        assert set(sink.tables) == {PROBABILITY_SHEET, EXPECTED_VALUE_SHEET}

    def test_failed_export_leaves_no_workbook(self, analysis, tmp_path):
        class FailingSecondSheet(ExcelTabularSink):
            def write_table(self, name, row_headers, col_headers, values):
                if name == EXPECTED_VALUE_SHEET:
                    raise OSError("disk full")
                super().write_table(name, row_headers, col_headers, values)

        path = tmp_path / "Keno.xlsx"
        with pytest.raises(OSError):
            KenoModel().export(analysis, FailingSecondSheet(path))
        assert not path.exists()


class TestExportScript:
    """scripts/export_keno.py main()"""

    def test_xlsx_export(self, tmp_path):
        script = _load_script()
        out = tmp_path / "Keno.xlsx"
        assert script.main(["--output", str(out), "--format", "xlsx"]) == 0
        assert load_workbook(out).sheetnames == [PROBABILITY_SHEET, EXPECTED_VALUE_SHEET]

    def test_csv_export_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("KENO_OUTPUT_DIR", str(tmp_path))
        monkeypatch.setenv("KENO_OUTPUT_FILE", "Keno.xlsx")
        monkeypatch.setenv("KENO_EXPORT_FORMAT", "csv")
        script = _load_script()
        assert script.main([]) == 0
        assert (tmp_path / "Keno" / "keno_probability_matrix.csv").exists()
        assert (tmp_path / "Keno" / "expected_pay_out_values.csv").exists()

    def test_failure_returns_one(self, tmp_path, monkeypatch):
        monkeypatch.setenv("KENO_EXPORT_FORMAT", "ods")
        script = _load_script()
        assert script.main(["--output", str(tmp_path / "k.ods")]) == 1

    def test_invalid_log_level_returns_one(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "CHATTY")
        script = _load_script()
        out = tmp_path / "Keno.xlsx"
        assert script.main(["--output", str(out)]) == 1
        assert not out.exists()

    def test_verbose_overrides_log_level(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "CHATTY")
        script = _load_script()
        out = tmp_path / "Keno.xlsx"
        assert script.main(["--output", str(out), "--verbose"]) == 0
        assert out.exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
