"""
watchlist_radar.reporting — calendar building, terminal formatting, export.

Modules:
  calendar   — 12-month dividend calendar data (cells, totals, gaps).
  formatters — ASCII terminal formatters for Typer CLI commands.
  export     — plain-dict record builders and JSON file export.
"""
