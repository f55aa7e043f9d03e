"""AI-assisted book search."""
