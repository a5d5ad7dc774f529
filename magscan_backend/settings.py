from __future__ import annotations

import os
from dataclasses import dataclass

# NOTE:
# - Paths should be absolute on the user's machine.
# - You can override ANY value with environment variables.
#
# Suggested env overrides:
#   MAGSCAN_MAIN_FOLDER  (default folder for the CLI report mode)
#   MAGSCAN_OUTPUT_DIR
#   MAGSCAN_DATA_EXT     (default .dat)
#   MAGSCAN_DELIMITER    (default |)
#   MAGSCAN_TZ           (pytz zone name, empty = local time)
#   MAGSCAN_HOST / MAGSCAN_PORT


@dataclass(frozen=True)
class ScanSettings:
    # Root folder that contains one subfolder per reader: <main>/<subfolder>/<file>.dat
    main_folder: str = os.environ.get("MAGSCAN_MAIN_FOLDER", "")

    # Where the CLI writes results_<date>.xlsx
    output_dir: str = os.environ.get("MAGSCAN_OUTPUT_DIR", os.path.join(os.getcwd(), "_output"))

    # Data file convention: {code}_{DDMMYYYY}_{n}_{m}.dat, pipe-delimited lines
    data_extension: str = os.environ.get("MAGSCAN_DATA_EXT", ".dat")
    field_delimiter: str = os.environ.get("MAGSCAN_DELIMITER", "|")

    # Timezone used to turn mtimes into calendar dates
    timezone: str = os.environ.get("MAGSCAN_TZ", "")

    host: str = os.environ.get("MAGSCAN_HOST", "127.0.0.1")
    port: int = int(os.environ.get("MAGSCAN_PORT", "8000"))

DEFAULT_SETTINGS = ScanSettings()
