"""Recipe catalog loading and CSV ingestion."""
