"""
rediskit Test Suite
===================

Test Organization
-----------------
- tests/unit/          : Fast unit tests against a mocked executor (no network)
- tests/integration/   : Integration tests with testcontainers (real Redis)

Testing Philosophy
------------------
- Unit tests: exact wire arguments and reply decoding
- Integration tests: real server behavior for every command family
- Use pytest markers to categorize and selectively run tests
- Follow AAA pattern: Arrange, Act, Assert
"""
