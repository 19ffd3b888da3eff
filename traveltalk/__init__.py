"""TravelTalk translator: multi-provider text translation with fallbacks."""

__version__ = "1.0.0"
