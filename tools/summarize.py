"""Summaries of streamed scan results."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

logger = logging.getLogger(__name__)

GROUP_COLUMNS = ["net.name", "net.nodes", "process.game"]


def load_results(path: str | Path) -> pd.DataFrame:
    """Load a JSON lines results file into a flat :class:`pandas.DataFrame`.

    Nested ``net`` and ``process`` mappings become dotted columns and the
    node-averaged ``policy`` is split into ``policy_0``, ``policy_1``, ...
    Rows are sorted by task ``index``.
    """

    rows: List[Dict[str, Any]] = []
    with open(path) as fh:
        for line in fh:
            if line.strip():
                rows.append(json.loads(line))
    if not rows:
        return pd.DataFrame()
    for row in rows:
        row.pop("avg_policy", None)
        for i, p in enumerate(row.pop("policy", [])):
            row[f"policy_{i}"] = p
    df = pd.json_normalize(rows)
    if "index" in df.columns:
        df = df.sort_values("index").reset_index(drop=True)
    return df


def summarize(path: str | Path, out: str | Path) -> pd.DataFrame:
    """Aggregate replications of each configuration and write a CSV.

    Rows are grouped by network name and size plus the process kind; the
    summary reports the replication count, the converged fraction, mean and
    spread of the step count and the mean of every ``policy_*`` column.
    """

    df = load_results(path)
    if df.empty:
        logger.warning("no results in %s; writing empty summary", path)
        summary = pd.DataFrame()
    else:
        keys = [c for c in GROUP_COLUMNS if c in df.columns]
        policy_cols = [c for c in df.columns if c.startswith("policy_")]
        agg: Dict[str, Any] = {
            "runs": ("steps", "size"),
            "converged": ("converged", "mean"),
            "steps_mean": ("steps", "mean"),
            "steps_std": ("steps", "std"),
        }
        for col in policy_cols:
            agg[f"{col}_mean"] = (col, "mean")
        summary = df.groupby(keys, dropna=False).agg(**agg).reset_index()
    summary.to_csv(out, index=False)
    return summary


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Summarise scan results")
    parser.add_argument("results", type=Path, help="JSON lines results file")
    parser.add_argument("out", type=Path, help="CSV destination")
    args = parser.parse_args(argv)
    summarize(args.results, args.out)


if __name__ == "__main__":
    main()
