"""FastAPI endpoints for LinguaRelay.

Thin HTTP layer over the orchestrator with uniform JSON error envelopes.

Endpoints:
    - GET /health: Service liveness
    - POST /api/translate: Document upload and translation
    - POST /api/chat: Chat completion in a chosen language
"""
