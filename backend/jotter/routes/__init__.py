"""
Jotter Backend: API Routes Package
===================================

Route Inventory:
    - notes.py:   GET  /notes              (list, most recently updated first)
                  POST /notes              (create, rate limited per client)
                  GET  /notes/search?q=    (substring search)
                  PUT  /notes/{id}         (partial update, no-op detection)
    - health.py:  GET  /health             (service health check)

Routes stay thin: read the request, call NoteService, map the Result.
"""
