"""LinguaRelay - document translation and multilingual chat over a hosted LLM.

Combines FastAPI for the HTTP surface, Agno for model access, NiceGUI for the
chat client, and Pydantic for data validation.

Components:
    - api: HTTP endpoints for translation, chat, and health
    - gateway: model access configuration and completion calls
    - parsing: upload storage and PDF/TXT text extraction
    - ui: conversation store and web chat client
    - models: Request/response schemas
"""

__version__ = "0.1.0"
