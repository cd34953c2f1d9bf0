"""Personal trading journal — trade accounting, statistics and AI mentor."""

__version__ = "1.0.0"
