"""Trade activity analytics: ingestion, metrics and dashboard API."""
