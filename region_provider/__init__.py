"""Region data-acquisition layer for civic data plugins."""

__version__ = "1.0.0"
