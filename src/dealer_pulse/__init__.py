"""Sales-analytics ingestion for dealership DMS report exports."""

__version__ = "0.1.0"
