"""HK IPO prospectus scoring engine."""

__version__ = "1.0.0"
