"""Composable stateful generators that yield streams and return results."""

__version__ = "0.1.0"