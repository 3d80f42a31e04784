"""Unit tests for core cart logic."""
