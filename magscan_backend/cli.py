from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from .settings import DEFAULT_SETTINGS
from .engine import output_filename, process_main_folder, summarize
from .outputs import write_report_xlsx

logger = logging.getLogger(__name__)


def run_report(main_folder: str, output: str = "") -> Path:
    s = DEFAULT_SETTINGS
    index = process_main_folder(main_folder, s)

    if output:
        out_path = Path(output)
    else:
        out_path = Path(s.output_dir) / output_filename(date.today())
    out_path.parent.mkdir(parents=True, exist_ok=True)

    write_report_xlsx(out_path, index)
    n_dates, n_records = summarize(index)
    logger.info("[OK] Wrote %d record(s) across %d date(s) to: %s", n_records, n_dates, out_path)
    return out_path


def run_serve():
    import uvicorn

    s = DEFAULT_SETTINGS
    uvicorn.run("magscan_backend.api_app:app", host=s.host, port=s.port)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Scan magazine reading folders into an Excel report.")
    ap.add_argument("--mode", choices=["report", "serve"], default="report")
    ap.add_argument("--main-folder", default=DEFAULT_SETTINGS.main_folder)
    ap.add_argument("--output", default="", help="xlsx path (default: <output_dir>/results_<today>.xlsx)")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.mode == "serve":
        run_serve()
        return 0

    if not args.main_folder:
        ap.error("--main-folder is required (or set MAGSCAN_MAIN_FOLDER)")
    try:
        run_report(args.main_folder, args.output)
    except (OSError, ValueError) as e:
        logger.error("[ERROR] scan failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
