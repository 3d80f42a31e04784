"""Test suite for the cart builder.

Organized into three categories:

1. core/: Unit tests for core cart logic
   - No external dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Tests for adapter implementations
   - In-memory repository and fixed-rate shipping

3. fakes/: Port implementations for testing
   - Recording implementations of CartRepositoryPort, StoreLookupPort, etc.
   - Used by core unit tests
"""
