"""Recipe portion calculator: scaled quantities and nutrition facts."""

__version__ = "0.1.0"
