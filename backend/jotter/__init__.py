"""
Jotter Backend: Application Package
====================================

A small note-taking HTTP API: create, list, search and update short notes.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (validation, decisions)   │  ← return Result values
    ├─────────────────────────────────────┤
    │     Repositories (Note Store)       │  ← async SQLAlchemy queries
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
