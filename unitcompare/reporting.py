"""Utilities for exporting calculation outputs to disk."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from .config import DisplayConfig, OutputConfig
from .formatting import describe_result
from .pricing import Summary

logger = logging.getLogger(__name__)


def export_summary(
    summary: Summary,
    output: OutputConfig,
    display: Optional[DisplayConfig] = None,
) -> Dict[str, Path]:
    """Persist the per-row table and an audit record of ``summary``."""

    output_dir = output.directory
    output_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Writing reports to %s", output_dir)

    paths: Dict[str, Path] = {}

    frame = summary.to_frame()
    frame["result"] = [describe_result(row, display) for row in summary.rows]
    summary_path = output_dir / output.summary_report
    frame.to_csv(summary_path, index=False)
    paths["summary"] = summary_path

    audit_payload: Dict[str, Any] = {
        "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "status": summary.status.value,
        "winner_id": summary.winner_id,
        "message": summary.message,
        "rows": [_audit_row(record) for record in frame.to_dict(orient="records")],
    }
    audit_path = output_dir / output.audit_log
    with audit_path.open("w", encoding="utf-8") as handle:
        json.dump(audit_payload, handle, ensure_ascii=False, indent=2)
    paths["audit"] = audit_path

    return paths


def _audit_row(record: Dict[str, Any]) -> Dict[str, Any]:
    cleaned: Dict[str, Any] = {}
    for key, value in record.items():
        if hasattr(value, "item"):
            value = value.item()
        if isinstance(value, float) and np.isnan(value):
            value = None
        cleaned[key] = value
    return cleaned


__all__ = ["export_summary"]
