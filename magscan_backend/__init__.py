"""Magazine scan backend package.

Scans a folder tree of magazine reading files, keeps the most recent file per
logical reading and renders the result as an Excel report. Run the API with:

    python -m uvicorn magscan_backend.api_app:app --host 127.0.0.1 --port 8000
"""
