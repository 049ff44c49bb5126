# Routes package init
"""
Notes Backend: API Routes Package
=================================

Route Inventory:
    - notes.py:   /api/notes resource (create/update, list, get, delete, stats)
    - health.py:  GET /health

Routes handle HTTP concerns only and delegate to NoteService.
"""
