"""Search pipeline: completion, parsing, enrichment and the saved list."""
