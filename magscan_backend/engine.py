from __future__ import annotations

import logging
import stat
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd
import pytz

from .models import GroupKey, RawFileEntry, REPORT_COLUMNS, ReportIndex, ResolvedRecord
from .parsers import extract_last_line_values, parse_filename
from .settings import DEFAULT_SETTINGS, ScanSettings

logger = logging.getLogger(__name__)


# -----------------------------
# Helpers: dates + keys
# -----------------------------
def modified_at(st_mtime: float, tz_name: str = "") -> datetime:
    """Filesystem mtime as a datetime; local time unless a pytz zone name is given."""
    if tz_name:
        return datetime.fromtimestamp(st_mtime, pytz.timezone(tz_name))
    return datetime.fromtimestamp(st_mtime)

def modification_date(st_mtime: float, tz_name: str = "") -> date:
    return modified_at(st_mtime, tz_name).date()

def _sorted_entries(folder: Path) -> List[Path]:
    # name order keeps repeated scans of the same tree identical
    return sorted(folder.iterdir(), key=lambda p: p.name)


# -----------------------------
# Subfolder scan + reconciliation
# -----------------------------
def collect_entries(subfolder_path: Path, settings: ScanSettings = DEFAULT_SETTINGS) -> Dict[GroupKey, List[RawFileEntry]]:
    """Group the data files of one subfolder by GroupKey, in first-seen order."""
    groups: Dict[GroupKey, List[RawFileEntry]] = {}
    for p in _sorted_entries(subfolder_path):
        st = p.stat()
        if not stat.S_ISREG(st.st_mode):
            continue

        match = parse_filename(p.name, settings.data_extension)
        if match is None:
            logger.debug("skipping non-data file %s", p)
            continue

        mod_day = modification_date(st.st_mtime, settings.timezone)
        entry = RawFileEntry(
            file_path=p,
            file_name=p.name,
            magazine_code=match.magazine_code,
            date_from_filename=match.date_from_filename,
            filename_digits=match.filename_digits,
            modification_date=mod_day,
            mtime_ns=st.st_mtime_ns,
        )
        groups.setdefault(entry.group_key, []).append(entry)
    return groups

def pick_latest(entries: List[RawFileEntry]) -> RawFileEntry:
    """Most recently modified entry wins; equal mtimes fall back to the smallest file name."""
    return sorted(entries, key=lambda e: (-e.mtime_ns, e.file_name))[0]

def process_subfolder(subfolder_path: Path, settings: ScanSettings = DEFAULT_SETTINGS) -> List[ResolvedRecord]:
    """Return one ResolvedRecord per GroupKey found in the subfolder."""
    groups = collect_entries(Path(subfolder_path), settings)

    results: List[ResolvedRecord] = []
    for key, entries in groups.items():
        latest = pick_latest(entries)
        if len(entries) > 1:
            logger.debug("%s: %d candidates, keeping %s", key, len(entries), latest.file_name)

        values = extract_last_line_values(latest.file_path, settings.field_delimiter)
        results.append(
            ResolvedRecord(
                file_name=latest.file_name,
                magazine_code=latest.magazine_code,
                date_from_filename=latest.date_from_filename,
                modification_date=latest.modification_date,
                in_value=values.in_value,
                out_value=values.out_value,
            )
        )
    return results


# -----------------------------
# Main folder aggregation
# -----------------------------
def organize_by_modification_date(records: List[ResolvedRecord]) -> ReportIndex:
    organized: ReportIndex = {}
    for r in records:
        organized.setdefault(r.modification_date_str, []).append(r)
    return organized

def process_main_folder(main_folder_path: Optional[str], settings: ScanSettings = DEFAULT_SETTINGS) -> ReportIndex:
    """
    Scan every direct subfolder of main_folder_path and bucket the resolved
    records by modification date. Files at the top level are ignored.

    Any listing/stat failure aborts the whole scan.
    """
    if not main_folder_path:
        raise ValueError("main_folder_path is required")

    root = Path(main_folder_path)
    results: List[ResolvedRecord] = []
    try:
        for p in _sorted_entries(root):
            if stat.S_ISDIR(p.stat().st_mode):
                results.extend(process_subfolder(p, settings))
    except OSError as e:
        logger.error("[ERROR] processing main folder %s: %s", root, e)
        raise

    organized = organize_by_modification_date(results)
    logger.info("[OK] scanned %s: %d record(s) over %d date(s)", root, len(results), len(organized))
    return organized


# -----------------------------
# Outputs
# -----------------------------
def report_to_frame(index: ReportIndex) -> pd.DataFrame:
    """Flatten a ReportIndex into report rows (REPORT_COLUMNS), bucket order kept."""
    rows = [r.to_row() for records in index.values() for r in records]
    return pd.DataFrame(rows, columns=REPORT_COLUMNS, dtype="object")

def output_filename(run_day: date) -> str:
    return f"results_{run_day.isoformat()}.xlsx"

def summarize(index: ReportIndex) -> Tuple[int, int]:
    """(dates, records) in a ReportIndex"""
    return len(index), sum(len(v) for v in index.values())
