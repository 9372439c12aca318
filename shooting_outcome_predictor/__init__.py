"""Shooting Outcome Predictor package.

Cleaning, descriptive charts and a fatal-outcome logistic regression over NYPD shooting incident records.
"""

__all__ = [
    "constants",
    "loader",
    "preprocessing",
    "visualization",
    "modeling",
    "evaluation",
    "logit_model",
    "stats_analysis",
    "pipeline",
    "report",
    "logging_utils",
]

__version__ = "0.1.0"
