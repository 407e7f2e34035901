"""
tests/test_write_report.py

CSV report layout, quoting round-trip, and the update results file.
"""

from __future__ import annotations

import csv
import json
from datetime import date

from shopify_audit.analyze.analyze_products import AuditRow
from shopify_audit.apply.apply_updates import UpdateSummary
from shopify_audit.report.write_report import (
    CSV_HEADERS,
    report_filename,
    write_csv_report,
    write_update_results,
)

DAY = date(2026, 10, 18)


def make_row(**overrides):
    values = dict(
        product_id="1",
        handle="red-cap",
        title="Red Cap",
        variant_id="11",
        variant_title="Default",
        sku="RC-1",
        current_weight="MISSING",
        suggested_weight="1 kg",
        current_seo_title="EMPTY",
        suggested_seo_title="Red Cap | red-cap",
        needs_weight_update=True,
        needs_seo_update=True,
    )
    values.update(overrides)
    return AuditRow(**values)


def read_csv(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def test_filename_embeds_date():
    assert report_filename(DAY) == "shopify-audit-report-2026-10-18.csv"


def test_header_has_twelve_fixed_columns(tmp_path):
    path = write_csv_report([], tmp_path, today=DAY)

    rows = read_csv(path)
    assert rows == [CSV_HEADERS]
    assert len(CSV_HEADERS) == 12


def test_flags_written_as_yes_no(tmp_path):
    path = write_csv_report(
        [make_row(), make_row(variant_id="12", needs_weight_update=False, needs_seo_update=False)],
        tmp_path,
        today=DAY,
    )

    rows = read_csv(path)
    assert rows[1][10:] == ["YES", "YES"]
    assert rows[2][10:] == ["NO", "NO"]


def test_embedded_commas_and_quotes_round_trip(tmp_path):
    row = make_row(
        title='Cap, "Limited" Edition',
        variant_title='7 1/4", Red',
        sku='A,"B"',
        current_seo_title='Say "hi", then leave',
        suggested_seo_title='Cap, "Limited" Edition | red-cap',
    )

    path = write_csv_report([row], tmp_path, today=DAY)

    parsed = read_csv(path)[1]
    assert parsed[2] == 'Cap, "Limited" Edition'
    assert parsed[4] == '7 1/4", Red'
    assert parsed[5] == 'A,"B"'
    assert parsed[8] == 'Say "hi", then leave'
    assert parsed[9] == 'Cap, "Limited" Edition | red-cap'


def test_rows_keep_insertion_order(tmp_path):
    rows = [make_row(variant_id=str(i)) for i in (30, 10, 20)]

    path = write_csv_report(rows, tmp_path, today=DAY)

    assert [r[3] for r in read_csv(path)[1:]] == ["30", "10", "20"]


def test_same_day_rerun_overwrites(tmp_path):
    write_csv_report([make_row(), make_row()], tmp_path, today=DAY)
    path = write_csv_report([make_row()], tmp_path, today=DAY)

    assert len(read_csv(path)) == 2
    assert len(list(tmp_path.glob("*.csv"))) == 1


def test_update_results_json(tmp_path):
    summary = UpdateSummary(updated=1, failed=1, skipped=2,
                            variants_updated=["11"], errors=["product 1: seo.title: too long"])

    path = write_update_results(summary, "APPLY", tmp_path, today=DAY)

    assert path.name == "shopify-audit-updates-2026-10-18.json"
    data = json.loads(path.read_text())
    assert data["execution_mode"] == "APPLY"
    assert data["summary"]["updated"] == 1
    assert data["summary"]["variants_updated"] == ["11"]
    assert data["summary"]["errors"] == ["product 1: seo.title: too long"]
