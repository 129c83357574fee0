"""Labels for Whoop's recovery, strain and sleep scores, using Whoop's own terminology."""

from __future__ import annotations

RECOVERY_DESCRIPTIONS: dict[str, str] = {
    "SUFFICIENT": "Well recovered, ready to perform",
    "ADEQUATE": "Maintaining health, can handle moderate stress",
    "LOW": "Working hard to recover, needs rest",
}

STRAIN_DESCRIPTIONS: dict[str, str] = {
    "LIGHT": "Minimal exertion, encourages active recovery",
    "MODERATE": "Balances fitness gains and recovery",
    "HIGH": "Builds fitness, harder to recover next day",
    "ALL_OUT": "Significant exertion, risk for injury/overtraining",
}

SLEEP_PERFORMANCE_DESCRIPTIONS: dict[str, str] = {
    "OPTIMAL": "Got enough sleep to fully recover",
    "SUFFICIENT": "Got adequate sleep for basic recovery",
    "POOR": "Did not get enough sleep, recovery impacted",
}


def get_recovery_level(recovery_score: float) -> str:
    """SUFFICIENT at 67% and above, ADEQUATE from 34%, otherwise LOW."""
    if recovery_score >= 67:
        return "SUFFICIENT"
    if recovery_score >= 34:
        return "ADEQUATE"
    return "LOW"


def get_strain_level(strain_score: float) -> str:
    """Whoop strain bands: 0-9 light, 10-13 moderate, 14-17 high, 18-21 all out."""
    if strain_score < 10:
        return "LIGHT"
    if strain_score < 14:
        return "MODERATE"
    if strain_score < 18:
        return "HIGH"
    return "ALL_OUT"


def get_sleep_performance_level(sleep_performance_percentage: float) -> str:
    if sleep_performance_percentage >= 85:
        return "OPTIMAL"
    if sleep_performance_percentage >= 70:
        return "SUFFICIENT"
    return "POOR"
