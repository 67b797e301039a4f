"""Dashboard for enabling repositories and organizations on a CI service."""

__version__ = "1.0.0"
