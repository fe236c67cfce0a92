"""Date-keyed persistence of normalized points."""
