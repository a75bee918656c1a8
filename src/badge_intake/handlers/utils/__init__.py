"""Handler utilities: observability, errors, responses and routing."""
