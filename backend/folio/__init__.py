"""Folio — content backend for posts, projects, uploads and contact mail.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
