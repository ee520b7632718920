"""Infrastructure Layer — database, blob storage, mail transport, logging.

Invariants:
    - Infrastructure never imports from api/
    - All external failures mapped to FolioError subclasses (core/errors.py)
"""
