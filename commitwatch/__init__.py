"""commitwatch - split uncommitted changes into small, reviewable commits."""

__version__ = "0.1.0"
