"""
Tabular snapshots of experiments.

One row per variant, written as CSV so the dashboard state can outlive the
process or be loaded into a notebook.
"""

import logging
from pathlib import Path
from typing import Iterable

import pandas as pd

from .schema import Experiment
from .stats import conversion_rate

logger = logging.getLogger(__name__)

SNAPSHOT_COLUMNS = [
    "experiment_id",
    "experiment_name",
    "status",
    "primary_metric",
    "created_at",
    "started_at",
    "ended_at",
    "variant_position",
    "variant_id",
    "variant_name",
    "traffic_percent",
    "visitors",
    "conversions",
    "conversion_rate",
    "is_winner",
]


def _variant_rows(exp: Experiment) -> list:
    winner = exp.results.winner if exp.results else None
    return [
        {
            "experiment_id": exp.experiment_id,
            "experiment_name": exp.name,
            "status": exp.status.value,
            "primary_metric": exp.metrics.primary_metric,
            "created_at": exp.created_at,
            "started_at": exp.started_at,
            "ended_at": exp.ended_at,
            "variant_position": i,
            "variant_id": v.variant_id,
            "variant_name": v.name,
            "traffic_percent": v.traffic_percent,
            "visitors": v.visitors,
            "conversions": v.conversions,
            "conversion_rate": conversion_rate(v.conversions, v.visitors),
            "is_winner": v.variant_id == winner,
        }
        for i, v in enumerate(exp.variants)
    ]


def experiments_to_frame(experiments: Iterable[Experiment]) -> pd.DataFrame:
    """Flatten experiments into one row per variant."""
    rows = []
    for exp in experiments:
        rows.extend(_variant_rows(exp))
    return pd.DataFrame(rows, columns=SNAPSHOT_COLUMNS)


def write_snapshot(experiments: Iterable[Experiment], path: str) -> int:
    """
    Write a CSV snapshot of experiments.

    Returns:
        Number of variant rows written
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    df = experiments_to_frame(experiments)
    df.to_csv(out, index=False)
    logger.info(f"Wrote {len(df)} variant rows to {out}")
    return len(df)


def read_snapshot(path: str) -> pd.DataFrame:
    """Read a snapshot written by write_snapshot; empty if missing."""
    p = Path(path)
    if not p.exists():
        return pd.DataFrame(columns=SNAPSHOT_COLUMNS)
    df = pd.read_csv(p)
    for col in ("created_at", "started_at", "ended_at"):
        if col in df.columns:
            df[col] = pd.to_datetime(df[col])
    return df
