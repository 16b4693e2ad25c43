"""Quick-open fuzzy file search and single-file change watching."""
