"""
Leaderboard History

Modules:
- store: Snapshot stores (JSON files, in-memory)
- tracker: Weekly snapshots and position changes
"""
