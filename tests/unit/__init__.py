"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Upload storage and text extraction
    - gateway/: Configuration, client construction, response decoding
    - orchestrator: Translate and chat operations
    - ui/state: Conversation store and persistence boundary

Uses mocks for the hosted model. Leverages pytest-check for multiple
assertions per test.
"""
