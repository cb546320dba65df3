"""Google Docs API access."""
