"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Conversation list with create, copy, and delete
    - Chat message display and per-conversation language selection
    - Document upload for translation
    - Client-side persistence of conversations

Contains minimal business logic. Delegates all operations to the API.
"""
