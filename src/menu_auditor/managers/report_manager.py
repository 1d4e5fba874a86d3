import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import pandas as pd

from menu_auditor.model import RunReport

logger = logging.getLogger(__name__)


class ReportManager:
    """
    Turns a RunReport into exportable tables and JSON summaries.
    """

    SUPPORTED_SUFFIXES = (".csv", ".json")

    def to_dataframe(self, report: RunReport) -> pd.DataFrame:
        return pd.DataFrame(
            report.export_rows(),
            columns=["Source", "Region", "Code", "Status", "Description", "Message"]
        )

    def build_summary(self, report: RunReport) -> Dict[str, Any]:
        """Constructs the run-level summary payload."""
        df = self.to_dataframe(report)
        breakdown = (
            df.groupby(["Region", "Status"]).size().reset_index(name="Count").to_dict(orient="records")
            if not df.empty else []
        )
        return {
            "summary": {
                "source": report.source,
                "checks": report.total,
                "passed": report.passed,
                "failed": report.failed,
                "errored": report.errored,
                "ok": report.ok,
                "duration": round(report.duration, 4),
                "created_at": report.created_at.isoformat()
            },
            "breakdown": breakdown
        }

    def export(self, report: RunReport, path: Union[str, Path]) -> Path:
        """
        Writes the per-check results to ``path``.
        The format follows the suffix: .csv for a flat table, .json for the
        summary plus the result rows.
        """
        out_path = Path(path)
        suffix = out_path.suffix.lower()
        if suffix not in self.SUPPORTED_SUFFIXES:
            raise ValueError(f"Unsupported export format '{suffix or out_path.name}' (use .csv or .json)")

        out_path.parent.mkdir(parents=True, exist_ok=True)
        df = self.to_dataframe(report)
        if suffix == ".csv":
            df.to_csv(out_path, index=False)
        else:
            payload = self.build_summary(report)
            payload["results"] = df.to_dict(orient="records")
            out_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2, default=str), encoding="utf-8")

        logger.info(f"Report exported to {out_path} ({len(df)} rows)")
        return out_path
