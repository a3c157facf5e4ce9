"""BlueMoon apartment back office: billing lifecycle and aggregation."""

__version__ = "0.1.0"
