"""Meta-file aware git status aggregation."""
