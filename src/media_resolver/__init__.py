"""Media Resolver - metadata extraction service for social media posts."""

__version__ = "1.0.0"
