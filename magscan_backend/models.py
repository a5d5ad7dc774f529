"""
Scan Data Models

Structures that flow through the folder scan:
- FilenameMatch: what the filename convention tells us about a file
- RawFileEntry: one matching file seen during a subfolder scan
- GroupKey: identifies the same logical reading at the same modification date
- ResolvedRecord: the chosen file of a group, enriched with in/out values

A ReportIndex maps "YYYY-MM-DD" modification dates to the records of that day.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, NamedTuple


# Column order of the rendered report
REPORT_COLUMNS = [
    "Modification Date",
    "File Name",
    "Magazine Code",
    "Date From Filename",
    "In Value",
    "Out Value",
]


@dataclass(frozen=True)
class FilenameMatch:
    """Fields pulled out of a data filename"""
    magazine_code: str
    day: str
    month: str
    year: str

    @property
    def date_from_filename(self) -> str:
        return f"{self.day}/{self.month}/{self.year}"

    @property
    def filename_digits(self) -> str:
        return f"{self.day}{self.month}{self.year}"


class LastLineValues(NamedTuple):
    in_value: str = ""
    out_value: str = ""


class GroupKey(NamedTuple):
    modification_date: str   # YYYY-MM-DD
    magazine_code: str
    filename_digits: str     # DDMMYYYY

    def __str__(self) -> str:
        return f"{self.modification_date}_{self.magazine_code}_{self.filename_digits}"


@dataclass(frozen=True)
class RawFileEntry:
    file_path: Path
    file_name: str
    magazine_code: str
    date_from_filename: str          # DD/MM/YYYY
    filename_digits: str             # DDMMYYYY
    modification_date: date
    mtime_ns: int                    # tie-break precision

    @property
    def group_key(self) -> GroupKey:
        return GroupKey(
            self.modification_date.isoformat(),
            self.magazine_code,
            self.filename_digits,
        )


@dataclass(frozen=True)
class ResolvedRecord:
    """
    One row of the report: the most recently modified file of a group plus
    the in/out values read from its last line.
    """
    file_name: str
    magazine_code: str
    date_from_filename: str
    modification_date: date
    in_value: str = ""
    out_value: str = ""

    @property
    def modification_date_str(self) -> str:
        return self.modification_date.isoformat()

    def to_row(self) -> List[str]:
        """Values in REPORT_COLUMNS order"""
        return [
            self.modification_date_str,
            self.file_name,
            self.magazine_code,
            self.date_from_filename,
            self.in_value,
            self.out_value,
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "modificationDate": self.modification_date_str,
            "fileName": self.file_name,
            "magazineCode": self.magazine_code,
            "dateFromFilename": self.date_from_filename,
            "inValue": self.in_value,
            "outValue": self.out_value,
        }


ReportIndex = Dict[str, List[ResolvedRecord]]
