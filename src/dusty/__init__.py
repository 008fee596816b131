"""dusty - find and clean disk caches from the terminal."""

__version__ = "0.1.0"
