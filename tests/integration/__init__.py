"""
Integration tests for CourtQueue.

This package contains end-to-end tests that drive a whole session through the
HTTP API: players joining, groups queueing, games starting and ending on
several courts, rentals and a snapshot restore.

Test files:
- test_happy_path.py: A club night from first arrivals to statistics
- test_main.py: Application wiring and health check
"""

# Mark this package for pytest discovery
__all__ = []
