# backend/roadrisk/driver_score.py
"""
Driver behaviour score: 100 minus the sum of logged deductions, floored at 0.
"""

from typing import Any, Dict, Iterable

START_SCORE = 100
RISKY_BELOW = 60
CAUTION_BELOW = 85


def compute_driver_score(logs: Iterable[Dict[str, Any]]) -> int:
    score = START_SCORE
    for log in logs:
        score -= int(log.get("score_deduction", 0))
    return max(0, score)


def badge_for_score(score: int) -> str:
    if score < RISKY_BELOW:
        return "Risky Driver"
    if score < CAUTION_BELOW:
        return "Caution Needed"
    return "Safe Driver"


def driver_summary(logs) -> Dict[str, Any]:
    logs = list(logs)
    score = compute_driver_score(logs)
    return {"current_score": score, "logs": logs, "badge": badge_for_score(score)}
