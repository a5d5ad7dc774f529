"""
File Parsers

Two small readers used by the scan engine:
- parse_filename: recognises data files by name and pulls out the magazine code and date
- extract_last_line_values: reads the in/out fields from the last line of a data file
"""
from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Optional, Pattern

from .models import FilenameMatch, LastLineValues

logger = logging.getLogger(__name__)


# =============================================================================
# Filename parsing
# =============================================================================

@lru_cache(maxsize=8)
def _filename_pattern(extension: str) -> Pattern[str]:
    # {code}_{DD}{MM}{YYYY}_{n}_{m}.dat
    return re.compile(
        r"(?P<code>\d+)_(?P<d>\d{2})(?P<m>\d{2})(?P<y>\d{4})_\d+_\d+" + re.escape(extension),
        re.ASCII,
    )


def parse_filename(name: str, extension: str = ".dat") -> Optional[FilenameMatch]:
    """
    Match a bare filename against the data file convention.

    Returns None for anything else (logs, hidden files, partial matches);
    callers skip those entries silently.
    """
    m = _filename_pattern(extension).fullmatch(name)
    if not m:
        return None
    return FilenameMatch(
        magazine_code=m.group("code"),
        day=m.group("d"),
        month=m.group("m"),
        year=m.group("y"),
    )


# =============================================================================
# Last line extraction
# =============================================================================

def extract_last_line_values(file_path: Path, delimiter: str = "|") -> LastLineValues:
    """
    Return the 4th-from-last and 3rd-from-last fields of the last non-empty line.

    A file that cannot be read or does not carry enough fields gives empty
    values instead of failing the scan.
    """
    try:
        # newline="" keeps a lone \r inside a line; only \n splits lines
        with open(file_path, "r", encoding="utf-8", newline="") as f:
            data = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("[WARN] could not read %s: %s", file_path, e)
        return LastLineValues()

    lines = data.rstrip().split("\n")
    fields = lines[-1].split(delimiter)
    if len(fields) < 4:
        logger.warning("[WARN] %s: last line has %d field(s), expected at least 4", file_path, len(fields))
        return LastLineValues()

    return LastLineValues(in_value=fields[-4], out_value=fields[-3])
