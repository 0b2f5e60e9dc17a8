"""
Unit tests for the Poisson outcome model
"""
import unittest

from valuebet.poisson import MAX_GOALS, calculate_outcome_probs, score_matrix


class TestScoreMatrix(unittest.TestCase):
    """Test the scoreline grid"""

    def test_grid_shape(self):
        self.assertEqual(score_matrix(1.2, 0.8).shape, (MAX_GOALS + 1, MAX_GOALS + 1))

    def test_negative_rate_rejected(self):
        with self.assertRaises(ValueError):
            score_matrix(-0.1, 1.0)


class TestOutcomeProbs(unittest.TestCase):
    """Test calculate_outcome_probs"""

    def test_probabilities_sum_to_one(self):
        for lambda_home, lambda_away in [(0.0, 0.0), (1.5, 1.0), (0.3, 2.7), (4.5, 0.0), (6.0, 6.0)]:
            probs = calculate_outcome_probs(lambda_home, lambda_away)
            self.assertAlmostEqual(probs.home + probs.draw + probs.away, 1.0, delta=1e-6)
            for value in (probs.home, probs.draw, probs.away):
                self.assertGreaterEqual(value, 0.0)
                self.assertLessEqual(value, 1.0)

    def test_zero_rates_is_certain_draw(self):
        probs = calculate_outcome_probs(0.0, 0.0)
        self.assertAlmostEqual(probs.draw, 1.0)
        self.assertAlmostEqual(probs.home, 0.0)
        self.assertAlmostEqual(probs.away, 0.0)

    def test_symmetry(self):
        forward = calculate_outcome_probs(1.5, 1.0)
        reverse = calculate_outcome_probs(1.0, 1.5)
        self.assertAlmostEqual(forward.home, reverse.away, places=12)
        self.assertAlmostEqual(forward.away, reverse.home, places=12)
        self.assertAlmostEqual(forward.draw, reverse.draw, places=12)

    def test_stronger_attack_favoured(self):
        probs = calculate_outcome_probs(1.5, 1.0)
        self.assertGreater(probs.home, probs.away)

    def test_large_gap_makes_draw_least_likely(self):
        probs = calculate_outcome_probs(3.0, 0.5)
        self.assertLess(probs.draw, probs.home)
        self.assertLess(probs.away, probs.draw)

    def test_away_cannot_win_without_scoring(self):
        probs = calculate_outcome_probs(2.0, 0.0)
        self.assertEqual(probs.away, 0.0)


if __name__ == "__main__":
    unittest.main()
