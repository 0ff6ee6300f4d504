"""
Trending dishes.

Responsibilities:
- Rank dish queries by a monotonic popularity score.
- Bump or insert entries whenever a dish is searched.
- Persist the whole collection locally and keep the default seeds present.
"""
