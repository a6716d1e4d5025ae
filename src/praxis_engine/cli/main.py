"""
CLI entry point using Typer.

Provides commands for the training engine:
- readiness: Score today's readiness from four 1-5 ratings
- plan: Generate a multi-week plan (or the initial week of training days)
- adjust: Rescale a planned day for today's readiness
- prs: Detect new personal records in a session log
- one-rm: Estimate a one-rep max and working loads
- exercises: List the exercise catalog
"""

from .app import app
from .commands import analysis, catalog, planning  # noqa: F401  (registers commands)

__all__ = ["app"]


if __name__ == "__main__":
    app()
