"""Round-robin scheduling, match scoring, rankings and roster substitution for padel leagues."""

__version__ = "0.1.0"
