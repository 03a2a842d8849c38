"""TradeLens - performance analytics and insight engine for a trading journal."""

__version__ = "0.1.0"
