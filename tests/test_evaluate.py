import json
from pathlib import Path

from certscan.evaluate import FieldStats, eval_fields, evaluate_manifest


def test_field_stats():
    stat = FieldStats(tp=3, fp=1, fn=1)
    assert stat.precision() == 0.75
    assert stat.recall() == 0.75
    assert stat.f1() == 0.75
    assert FieldStats().f1() == 0.0


def test_eval_fields_counts_wrong_values_both_ways():
    stats = {}
    eval_fields({"expiry_date": "2027-01-01"}, {"expiry_date": "2026-01-01"}, stats)
    eval_fields({}, {"valid_from": "2020-01-01"}, stats)
    assert (stats["expiry_date"].tp, stats["expiry_date"].fp, stats["expiry_date"].fn) == (0, 1, 1)
    assert stats["valid_from"].fp == 1


def test_evaluate_manifest_with_fallback(tmp_path: Path):
    manifest = tmp_path / "manifest.jsonl"
    manifest.write_text(
        json.dumps(
            {
                "text": "NPORS Operator Card\n01/02/2024\n01/02/2029",
                "employee_name": "Li Wei Chen",
                "expected": {
                    "employee_name": "Li Wei Chen",
                    "qualification_title": "NPORS Operator Card",
                    "valid_from": "2024-02-01",
                    "expiry_date": "2029-02-01",
                },
            }
        )
        + "\n\n"
    )
    summary, rows = evaluate_manifest(manifest)
    assert all(summary[field]["f1"] == 1.0 for field in summary)
    assert rows[0]["predicted"]["confidence"]["valid_from"] == "medium"
