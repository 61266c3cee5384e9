"""Lane layout for commit history graphs."""
