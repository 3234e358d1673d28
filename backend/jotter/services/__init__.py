"""
Jotter Backend: Services Layer
===============================

Service Inventory:
    - note_validator:  payload shape checks for create/update
    - note_changes:    no-op vs apply decision for updates
    - search_filter:   `q` -> escaped case-insensitive substring predicate
    - rate_limiter:    per-client sliding window for note creation
    - note_service:    per-endpoint orchestration over NoteRepository
"""
