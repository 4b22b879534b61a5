"""Grid cleaning robot simulation with pluggable traversal strategies."""

__version__ = "0.1.0"
