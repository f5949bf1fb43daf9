"""Test package for LinguaRelay.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP endpoint tests against the ASGI app

PDF fixtures are generated in conftest.py. Leverages pytest with
pytest-check for soft assertions.
"""
