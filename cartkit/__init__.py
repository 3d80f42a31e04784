"""cartkit: a fluent builder for shopping cart aggregates."""

__version__ = "0.1.0"
