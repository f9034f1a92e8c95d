"""
Rate Quote Engine

Rebuilds a shipping rule set (postal zones and rate rows) by replaying an
event log, then prices shipments against it.
"""

__version__ = "0.1.0"
