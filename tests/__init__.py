"""
Tests package - Test suite for the admission router.

Contains:
- unit/: Unit tests for parsing, pattern matching, dispatch and adapters
"""
