"""
File loaders that turn watchlist and dividend-history files into validated
model objects for the ranking and schedule cores.

Modules:
  loaders — load_watchlist() (JSON) + load_dividend_history() (CSV / JSON).
"""
