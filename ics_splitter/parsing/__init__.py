"""Low level handling of rfc5545 content lines.

These modules know how lines are folded and how a single content line breaks
down into a name, parameters and a value. They do not know anything about
events or calendars.
"""
