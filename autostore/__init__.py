"""In-vehicle APK catalog service."""

__version__ = "1.0.0"
