"""
Watchlist ranking: orders a user's tracked stocks by how good a buy each one
is right now, relative to the user's target prices.

Modules
-------
ranker : sort_priority() + rank_watchlist() + target_status() — pure
         functions, no I/O, safe to call concurrently.
"""
