"""MedAssist data layer: cache-first article sync, provider listings and booking submission."""

__version__ = "1.0.0"
