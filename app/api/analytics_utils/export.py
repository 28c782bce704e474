"""
Data Export

Builds the downloadable document (raw scans, day series, window totals) and
renders it as a spreadsheet or as JSON. A missing spreadsheet engine falls
back to JSON instead of failing the download.
"""

import io
import json
import logging
from datetime import date, datetime, timezone

from app.models.analytics.AnalyticsResponse import AggregateTotals, DailyBucket
from app.models.waste.WasteCategory import CATEGORY_KEYS
from app.models.waste.WasteScanModels import StoredEvent

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
JSON_MEDIA_TYPE = "application/json"


def export_filename(export_date: date, extension: str) -> str:
    return f"ecosort-data-{export_date.isoformat()}.{extension}"


def build_export_document(
    scans: list[StoredEvent],
    series: list[DailyBucket],
    totals: AggregateTotals,
    exported_at: datetime | None = None,
) -> dict:
    exported_at = exported_at or datetime.now(timezone.utc)
    ordered = sorted(scans, key=lambda scan: scan.timestamp, reverse=True)
    return {
        "scans": [scan.model_dump(mode="json") for scan in ordered],
        "series": [bucket.model_dump(mode="json") for bucket in series],
        "totals": totals.model_dump(mode="json"),
        "export_date": exported_at.isoformat(),
    }


def _flatten_bucket(bucket: dict) -> dict:
    row = {"date": bucket["date"]}
    for key in CATEGORY_KEYS:
        row[f"{key}_count"] = bucket[key]["count"]
        row[f"{key}_weight_kg"] = bucket[key]["weight_kg"]
    row["total"] = bucket["total"]
    row["total_weight_kg"] = bucket["total_weight_kg"]
    return row


def _flatten_scan(scan: dict) -> dict:
    impact = scan.get("impact") or {}
    row = {key: value for key, value in scan.items() if key != "impact"}
    row["co2_saved"] = impact.get("co2_saved")
    row["energy_saved"] = impact.get("energy_saved")
    return row


def render_xlsx(document: dict) -> bytes:
    """Write one sheet per section. Timestamps stay ISO strings (Excel has no tz support)."""
    import pandas as pd

    totals = document["totals"]
    totals_rows = [
        {"category": key, "count": totals[key]["count"], "weight_kg": totals[key]["weight_kg"]}
        for key in CATEGORY_KEYS
    ]
    totals_rows.append(
        {"category": "total", "count": totals["total"], "weight_kg": totals["total_weight_kg"]}
    )

    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pd.DataFrame([_flatten_scan(scan) for scan in document["scans"]]).to_excel(
            writer, sheet_name="scans", index=False
        )
        pd.DataFrame([_flatten_bucket(bucket) for bucket in document["series"]]).to_excel(
            writer, sheet_name="series", index=False
        )
        pd.DataFrame(totals_rows).to_excel(writer, sheet_name="totals", index=False)
        pd.DataFrame([{"export_date": document["export_date"]}]).to_excel(
            writer, sheet_name="info", index=False
        )
    return buffer.getvalue()


def render_json(document: dict) -> bytes:
    return json.dumps(document, indent=2).encode("utf-8")


def render_export(document: dict, fmt: str, export_date: date) -> tuple[bytes, str, str]:
    """
    Returns (body, media_type, filename).

    "xlsx" degrades to "json" when pandas or its Excel engine is not installed.
    """
    if fmt == "xlsx":
        try:
            body = render_xlsx(document)
            return body, XLSX_MEDIA_TYPE, export_filename(export_date, "xlsx")
        except ImportError as e:
            logger.warning("Spreadsheet export unavailable, falling back to JSON: %s", e)

    return render_json(document), JSON_MEDIA_TYPE, export_filename(export_date, "json")
