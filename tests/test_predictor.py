"""
Unit tests for ValuePredictor
"""
import json
import unittest

from tests.helpers import make_fixture, make_history, strong_and_weak
from valuebet.config import Config
from valuebet.models import RunSnapshot, TeamForm
from valuebet.names import merge_team_mappings
from valuebet.predictor import ValuePredictor


class TestValuePredictor(unittest.TestCase):
    """Test ValuePredictor"""

    def test_predictor_creation(self):
        """Test default configuration"""
        predictor = ValuePredictor()
        self.assertEqual(predictor.ev_threshold, 0.05)
        self.assertEqual(predictor.prob_threshold, 0.5)
        self.assertEqual(predictor.max_picks, 5)
        self.assertEqual(predictor.lookback, 10)
        self.assertEqual(predictor.min_matches, 5)

    def test_from_config(self):
        predictor = ValuePredictor.from_config(Config(ev_threshold=0.1, max_picks=3, lookback=6))
        self.assertEqual((predictor.ev_threshold, predictor.max_picks, predictor.lookback), (0.1, 3, 6))

    def test_price_fixture_gates_on_sample_size(self):
        predictor = ValuePredictor()
        self.assertIsNone(predictor.price_fixture(TeamForm(2.0, 1.0, 4), TeamForm(1.0, 1.0, 10)))
        self.assertIsNotNone(predictor.price_fixture(TeamForm(2.0, 1.0, 5), TeamForm(1.0, 1.0, 5)))

    def test_dominant_home_side(self):
        """Test a side that always wins 3-0 against one that always loses 0-3"""
        picks = ValuePredictor().predict(strong_and_weak(), make_fixture(home_odds=1.5, away_odds=3.0))
        self.assertEqual(len(picks), 1)
        self.assertEqual((picks[0].side, picks[0].market), ("Home", "DNB"))
        self.assertAlmostEqual(picks[0].model_prob, 1.0)
        self.assertAlmostEqual(picks[0].ev, 0.5)
        self.assertEqual(picks[0].confidence, "Very High")

    def test_insufficient_history_contributes_nothing(self):
        """Test fixtures with fewer than five matches per team are skipped"""
        matches = make_history("Strong", [(3, 0)] * 6) + make_history("Weak", [(0, 3)] * 4)
        fixture = make_fixture(home_odds=50.0, away_odds=50.0)
        self.assertEqual(ValuePredictor().predict(matches, fixture), [])
        self.assertEqual(ValuePredictor().predict_batch(matches, [fixture]), [])

    def test_mappings_resolve_team_names(self):
        fixture = make_fixture(home="Strong FC", away="Weak Town")
        mappings = {"Strong FC": "Strong", "Weak Town": "Weak"}

        self.assertEqual(ValuePredictor().predict(strong_and_weak(), fixture), [])
        picks = ValuePredictor().predict(strong_and_weak(), fixture, mappings)
        self.assertEqual(len(picks), 1)
        self.assertEqual(picks[0].match, "Strong FC vs Weak Town")

    def test_corpus_names_not_remapped_by_alias_table(self):
        """Test a club listed under an alias variant in the results is still priced"""
        matches = make_history("Tottenham Hotspur", [(3, 0)] * 6) + make_history("Weak", [(0, 3)] * 6)
        fixture = make_fixture(home="Tottenham Hotspur")

        picks = ValuePredictor().predict_batch(matches, [fixture], merge_team_mappings({}))

        self.assertEqual(len(picks), 1)
        self.assertEqual(picks[0].match, "Tottenham Hotspur vs Weak")

    def test_batch_ranking_and_truncation(self):
        """Test seven qualifying picks are cut to the five best"""
        odds = [1.1, 1.4, 1.2, 1.7, 1.3, 1.6, 1.5]
        fixtures = [make_fixture(home_odds=price) for price in odds]
        picks = ValuePredictor(max_picks=5).predict_batch(strong_and_weak(), fixtures)
        self.assertEqual(len(picks), 5)
        self.assertEqual([p.odds for p in picks], [1.7, 1.6, 1.5, 1.4, 1.3])
        evs = [p.ev for p in picks]
        self.assertEqual(evs, sorted(evs, reverse=True))

    def test_batch_is_deterministic(self):
        matches = strong_and_weak()
        fixtures = [make_fixture(home_odds=price) for price in (1.3, 1.3, 1.8)]
        predictor = ValuePredictor()
        first = predictor.predict_batch(matches, fixtures)
        second = predictor.predict_batch(matches, fixtures)
        self.assertEqual(json.dumps([p.to_dict() for p in first]),
                         json.dumps([p.to_dict() for p in second]))

    def test_inputs_not_modified(self):
        matches = strong_and_weak()
        fixtures = [make_fixture(home_odds=1.8), make_fixture(home_odds=1.2)]
        before_matches, before_fixtures = list(matches), list(fixtures)
        ValuePredictor().predict_batch(matches, fixtures)
        self.assertEqual(matches, before_matches)
        self.assertEqual(fixtures, before_fixtures)

    def test_batch_rejects_invalid_fixture(self):
        with self.assertRaises(ValueError):
            ValuePredictor().predict_batch(strong_and_weak(), [{"home_team": "Strong"}])

    def test_run_snapshot(self):
        snapshot = ValuePredictor().run(strong_and_weak(), [make_fixture(home_odds=1.5)])
        self.assertIsInstance(snapshot, RunSnapshot)
        self.assertEqual(len(snapshot.id), 32)
        self.assertTrue(snapshot.timestamp)
        self.assertEqual(len(snapshot.picks), 1)


if __name__ == "__main__":
    unittest.main()
