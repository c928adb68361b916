"""
MSPD Test Suite

Tests organized by pipeline step:
- test_request.py — query URL construction
- test_fetch.py — HTTP errors surfaced, no retries
- test_parse.py — JSON body / data / meta handling
- test_normalize.py — typed parsing, trillions, annualized growth (fail-loud gates)
- test_views.py — total-only, holder split, marketability, security class
- test_pipeline.py — end-to-end on a 3-month fixture, pagination
- test_report.py — summary statistics and charts
- test_config.py / test_cli.py — settings and Typer CLI
"""
