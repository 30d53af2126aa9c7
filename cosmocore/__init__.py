"""Cosmocore: trading-signal webhook ingestion service."""
