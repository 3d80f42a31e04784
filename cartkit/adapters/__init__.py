"""External adapters for the cart builder.

This package provides implementations of the core port interfaces.

Adapter Organization:

- repository/: Adapters for cart persistence (in-memory)
- shipping/: Shipping methods that price carts (fixed rate)
"""
