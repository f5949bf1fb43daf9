"""Integration tests for the HTTP surface.

Coverage:
    - POST /api/translate with generated PDF and TXT uploads
    - POST /api/chat input validation and error envelopes
    - GET /health

The model gateway is mocked, except for live tests that run only when
GROQ_API_KEY is set.
"""
