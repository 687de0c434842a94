"""EVENTSITE

The content core of a single-event microsite service. It owns each user's
event, the public subdomains that point at it, and the draft/active lifecycle
that decides when an event becomes publicly visible.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
