"""
Unit tests for the command-line interface
"""
import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import pandas as pd

from valuebet.cli import create_sample_data, main

HISTORICAL_HEADER = "Div,Date,HomeTeam,AwayTeam,FTHG,FTAG\n"


def _historical_csv():
    rows = []
    for i in range(6):
        rows.append(f"E0,{i + 1:02d}/09/2025,Strong,Opp {i},3,0")
        rows.append(f"E0,{i + 1:02d}/10/2025,Weak,Opp {i},0,3")
    return HISTORICAL_HEADER + "\n".join(rows) + "\n"


class TestCli(unittest.TestCase):
    """Test CLI commands"""

    def _run(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(argv)
        return code, out.getvalue()

    def test_no_command(self):
        code, _ = self._run([])
        self.assertEqual(code, 1)

    def test_template(self):
        code, output = self._run(["template"])
        self.assertEqual(code, 0)
        self.assertTrue(output.startswith("Date,League,HomeTeam,AwayTeam,AHh,Odds_H,Odds_A"))

    def test_demo(self):
        code, output = self._run(["demo"])
        self.assertEqual(code, 0)
        self.assertIn("Demo Mode", output)

    def test_sample_data_is_reproducible(self):
        first, _ = create_sample_data()
        second, _ = create_sample_data()
        self.assertEqual(first, second)
        self.assertEqual(len(first), 30)

    def test_analyze(self):
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            historical = tmp_path / "results.csv"
            historical.write_text(_historical_csv(), encoding="utf-8")
            upcoming = tmp_path / "upcoming.csv"
            upcoming.write_text(
                "Date,League,HomeTeam,AwayTeam,AHh,Odds_H,Odds_A\n"
                "2026-01-17,EPL,Strong,Weak,0.0,1.5,3.0\n"
                "2026-01-17,EPL,Strong,Nobody,0.0,1.5,3.0\n",
                encoding="utf-8",
            )
            output = tmp_path / "picks.csv"
            history = tmp_path / "history.json"

            code, _ = self._run([
                "analyze", "--historical", str(historical), "--upcoming", str(upcoming),
                "--output", str(output), "--history", str(history),
                "--mappings", str(tmp_path / "mappings.json"),
            ])

            self.assertEqual(code, 0)
            picks = pd.read_csv(output)
            runs = json.loads(history.read_text(encoding="utf-8"))

        self.assertEqual(len(picks), 1)
        self.assertEqual(picks.loc[0, "Match"], "Strong vs Weak")
        self.assertEqual(len(runs), 1)
        self.assertEqual(len(runs[0]["picks"]), 1)

    def test_map_saves_and_removes(self):
        with tempfile.TemporaryDirectory() as tmp:
            mappings = Path(tmp) / "mappings.json"

            code, _ = self._run(["map", "Strong FC", "Strong", "--mappings", str(mappings)])
            self.assertEqual(code, 0)
            self.assertEqual(json.loads(mappings.read_text(encoding="utf-8")), {"Strong FC": "Strong"})

            code, _ = self._run(["map", "Strong FC", "--remove", "--mappings", str(mappings)])
            self.assertEqual(code, 0)
            self.assertEqual(json.loads(mappings.read_text(encoding="utf-8")), {})

    def test_map_requires_historical_name(self):
        with tempfile.TemporaryDirectory() as tmp:
            mappings = Path(tmp) / "mappings.json"
            code, _ = self._run(["map", "Strong FC", "--mappings", str(mappings)])
            self.assertEqual(code, 1)
            self.assertFalse(mappings.exists())

    def test_missing_save_stores_top_suggestion(self):
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            historical = tmp_path / "results.csv"
            historical.write_text(_historical_csv(), encoding="utf-8")
            upcoming = tmp_path / "upcoming.csv"
            upcoming.write_text(
                "Date,League,HomeTeam,AwayTeam,AHh,Odds_H,Odds_A\n"
                "2026-01-17,EPL,Strong FC,Weak,0.0,1.5,3.0\n",
                encoding="utf-8",
            )
            mappings = tmp_path / "mappings.json"

            code, output = self._run([
                "missing", "--historical", str(historical), "--upcoming", str(upcoming),
                "--mappings", str(mappings), "--save",
            ])
            self.assertEqual(code, 0)
            self.assertIn("Strong FC: Strong", output)
            self.assertEqual(json.loads(mappings.read_text(encoding="utf-8")), {"Strong FC": "Strong"})

            code, output = self._run([
                "missing", "--historical", str(historical), "--upcoming", str(upcoming),
                "--mappings", str(mappings),
            ])
            self.assertEqual(code, 0)
            self.assertIn("All upcoming teams are matched.", output)

    def test_analyze_keeps_alias_variant_used_by_results(self):
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            historical = tmp_path / "results.csv"
            historical.write_text(_historical_csv().replace("Strong", "Tottenham Hotspur"), encoding="utf-8")
            upcoming = tmp_path / "upcoming.csv"
            upcoming.write_text(
                "Date,League,HomeTeam,AwayTeam,AHh,Odds_H,Odds_A\n"
                "2026-01-17,EPL,Tottenham Hotspur,Weak,0.0,1.5,3.0\n",
                encoding="utf-8",
            )
            output = tmp_path / "picks.csv"

            code, _ = self._run([
                "analyze", "--historical", str(historical), "--upcoming", str(upcoming),
                "--output", str(output), "--no-history",
                "--mappings", str(tmp_path / "mappings.json"),
            ])

            self.assertEqual(code, 0)
            picks = pd.read_csv(output)

        self.assertEqual(list(picks["Match"]), ["Tottenham Hotspur vs Weak"])

    def test_analyze_missing_file(self):
        code, _ = self._run(["analyze", "--historical", "/nonexistent.csv", "--upcoming", "/nonexistent.csv"])
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
