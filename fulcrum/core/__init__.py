"""Core Fulcrum object model

This module maps Fulcrum's user-defined form schemas onto navigable objects
and translates field values between data names and storage keys.

Architecture:
    - Pure Python over decoded JSON (no HTTP in the mapping engine)
    - Testable without HTTP mocking
    - Entities receive their FulcrumClient explicitly

Module Structure:
    - api/              : Low-level Fulcrum REST client and resource services
    - schema_index.py   : data_name -> (storage key, element) lookup table
    - field_codec.py    : stored value <-> friendly value per field type
    - schema_tree.py    : section / field navigation
    - record_binder.py  : per-field queries and payloads for one record
    - field.py, form.py, record.py, models.py : typed entities
    - collection.py     : list results with ordering and paging

Usage Pattern:
    Import explicitly when needed:
        from fulcrum.core.api import FulcrumClient, FormService, RecordService
        from fulcrum.core.schema_index import build_index
        from fulcrum.core.field_codec import decode, encode
"""
