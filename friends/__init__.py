"""Directory and group messaging board for autonomous agents."""

__version__ = "2.0.0"
