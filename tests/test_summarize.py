import json

import pandas as pd
import pytest

from tools.summarize import load_results, summarize


def _write(path, rows):
    path.write_text("".join(json.dumps(r) + "\n" for r in rows))


def _row(index, nodes, converged, steps, policy):
    return {
        "index": index,
        "replication": 0,
        "seed": index,
        "net": {"name": "line", "nodes": nodes, "edges": nodes - 1},
        "process": {"game": "br", "prob": 0.5},
        "steps": steps,
        "windows": 5,
        "converged": converged,
        "drift": 0.0,
        "policy": policy,
        "avg_policy": [policy] * nodes,
    }


def test_load_results_flattens_and_sorts(tmp_path):
    path = tmp_path / "r.jsonl"
    _write(
        path,
        [_row(1, 2, True, 10, [1.0, 0.0]), _row(0, 2, False, 20, [0.5, 0.5])],
    )
    df = load_results(path)
    assert df["index"].tolist() == [0, 1]
    assert "net.name" in df.columns
    assert "avg_policy" not in df.columns
    assert df["policy_1"].tolist() == [0.5, 0.0]


def test_summarize_groups_configurations(tmp_path):
    path = tmp_path / "r.jsonl"
    _write(
        path,
        [
            _row(0, 2, True, 10, [1.0, 0.0]),
            _row(1, 2, False, 30, [0.0, 1.0]),
            _row(2, 3, True, 12, [0.5, 0.5]),
        ],
    )
    out = tmp_path / "summary.csv"
    summary = summarize(path, out)
    assert len(summary) == 2
    first = summary[summary["net.nodes"] == 2].iloc[0]
    assert first["runs"] == 2
    assert first["converged"] == pytest.approx(0.5)
    assert first["steps_mean"] == pytest.approx(20.0)
    assert first["policy_0_mean"] == pytest.approx(0.5)
    assert len(pd.read_csv(out)) == 2


def test_summarize_empty_results(tmp_path):
    path = tmp_path / "r.jsonl"
    path.write_text("")
    out = tmp_path / "summary.csv"
    assert summarize(path, out).empty
    assert out.exists()
