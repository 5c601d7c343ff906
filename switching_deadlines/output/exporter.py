"""
Export functionality for deadline results and holiday lists.
"""

import csv
import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from switching_deadlines.data.schemas import (
    DeadlineResult,
    Holiday,
    SwitchingCase,
    ValidationResult,
)

logger = logging.getLogger(__name__)


class ResultExporter:
    """Exports calculation results to JSON and CSV files."""

    def __init__(
        self,
        output_directory: str = "results",
        timestamp_format: str = "%Y%m%d_%H%M%S",
    ):
        """
        Initialize the result exporter.

        Args:
            output_directory: Directory for output files.
            timestamp_format: Format string for timestamps in filenames.
        """
        self.output_directory = output_directory
        self.timestamp_format = timestamp_format

    def _resolve_path(self, output_path: Optional[str], prefix: str, extension: str) -> Path:
        if output_path:
            file_path = Path(output_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            return file_path

        output_dir = Path(self.output_directory)
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime(self.timestamp_format)
        return output_dir / f"{prefix}_{timestamp}.{extension}"

    def deadline_to_dict(
        self, switching_case: SwitchingCase, from_date: date, result: DeadlineResult
    ) -> dict:
        """
        Convert a deadline calculation to a JSON-serializable dictionary.

        Args:
            switching_case: The calculated case.
            from_date: Reference date of the calculation.
            result: Calculation result.

        Returns:
            Dictionary representation.
        """
        return {
            "switching_case": switching_case.model_dump(mode="json"),
            "from_date": from_date.isoformat(),
            "earliest_start_date": result.earliest_start_date_string,
            "working_days_applied": result.working_days_applied,
            "calendar_days_total": result.calendar_days_total,
            "is_retrospective": result.is_retrospective,
            "rule_applied": result.rule_applied.model_dump(mode="json"),
        }

    def validation_to_dict(self, switching_case: SwitchingCase, result: ValidationResult) -> dict:
        """Convert a validation result to a JSON-serializable dictionary."""
        return {
            "switching_case": switching_case.model_dump(mode="json"),
            "proposed_date": result.proposed_date.isoformat(),
            "is_valid": result.is_valid,
            "earliest_valid_date": (
                result.earliest_valid_date.isoformat() if result.earliest_valid_date else None
            ),
            "rule_applied": result.rule_applied.model_dump(mode="json"),
        }

    def export_json(self, data: dict, output_path: Optional[str] = None, prefix: str = "deadline") -> str:
        """
        Export a result dictionary to a JSON file.

        Args:
            data: Dictionary from deadline_to_dict or validation_to_dict.
            output_path: Optional specific output path.
            prefix: Filename prefix for generated names.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path(output_path, prefix, "json")

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        logger.info(f"Exported result to: {file_path}")
        return str(file_path)

    def export_csv(self, data: dict, output_path: Optional[str] = None, prefix: str = "deadline") -> str:
        """
        Export a result dictionary to a single-row CSV file.

        Nested dictionaries are flattened with dotted column names.

        Args:
            data: Dictionary from deadline_to_dict or validation_to_dict.
            output_path: Optional specific output path.
            prefix: Filename prefix for generated names.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path(output_path, prefix, "csv")

        row = {}
        for key, value in data.items():
            if isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    row[f"{key}.{sub_key}"] = sub_value
            else:
                row[key] = value

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=list(row))
            writer.writeheader()
            writer.writerow(row)

        logger.info(f"Exported result to: {file_path}")
        return str(file_path)

    def export_holidays_csv(self, holidays: List[Holiday], output_path: Optional[str] = None) -> str:
        """
        Export holidays list to CSV file.

        Args:
            holidays: List of holidays to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path(output_path, "holidays", "csv")

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["Date", "Name", "Type", "Bundeslaender", "Description"])
            for holiday in holidays:
                writer.writerow([
                    holiday.date,
                    holiday.name,
                    holiday.type.value,
                    " ".join(b.value for b in holiday.bundeslaender),
                    holiday.description or "",
                ])

        logger.info(f"Exported {len(holidays)} holidays to: {file_path}")
        return str(file_path)
