"""
Independent Poisson scoreline model
"""
import numpy as np
from scipy.stats import poisson

from valuebet.models import OutcomeProbabilities

# Goals per side covered by the score grid; the tail beyond is negligible
MAX_GOALS = 10


def score_matrix(lambda_home: float, lambda_away: float,
                 max_goals: int = MAX_GOALS) -> np.ndarray:
    """
    Joint probability of every scoreline up to max_goals for each side

    Rows are home goals, columns are away goals.
    """
    if lambda_home < 0 or lambda_away < 0:
        raise ValueError("Expected goal rates cannot be negative")
    goals = np.arange(max_goals + 1)
    home_pmf = poisson.pmf(goals, lambda_home)
    away_pmf = poisson.pmf(goals, lambda_away)
    return np.outer(home_pmf, away_pmf)


def calculate_outcome_probs(lambda_home: float, lambda_away: float,
                            max_goals: int = MAX_GOALS) -> OutcomeProbabilities:
    """
    Home win, draw and away win probabilities from two goal rates

    The truncated grid is renormalized so the three outcomes sum to 1.
    """
    matrix = score_matrix(lambda_home, lambda_away, max_goals)
    p_home = float(np.tril(matrix, -1).sum())
    p_draw = float(np.trace(matrix))
    p_away = float(np.triu(matrix, 1).sum())

    total = p_home + p_draw + p_away
    return OutcomeProbabilities(
        home=p_home / total,
        draw=p_draw / total,
        away=p_away / total,
    )
