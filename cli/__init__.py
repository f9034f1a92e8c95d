"""
Quotes CLI - shipping rate quotes from an event-sourced rule set

Commands:
- quotes quote - Price a request batch
- quotes check - Compare prices with an input/expected-output fixture
- quotes replay - Replay the event log and summarise the rule set
- quotes zone - Show how a postcode resolves
- quotes log tail - Show event log entries
"""

__version__ = "0.1.0"
