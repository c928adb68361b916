"""
MSPD - U.S. national debt from the Treasury Fiscal Data API

Modules:
- mspd: fetch, parse, normalize and chart MSPD table 1 (Typer CLI in mspd.cli)
"""
