"""Static secret scanning: pattern catalog, exclusion policy, traversal."""
