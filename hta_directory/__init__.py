"""Head TA directory: semester calendar and TA assignment engine."""

__version__ = "0.1.0"
