"""CLI module for TradeLens."""
