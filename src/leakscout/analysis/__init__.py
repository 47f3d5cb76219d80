"""LLM-backed analysis of scan findings and log files."""
