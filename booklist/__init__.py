"""Book List - Core Application Package

This package contains:
- Book list state and operations (library.py)
- Data model (book.py)
- Persistence adapter and key-value store (storage.py, database.py)
- CLI interface and output helpers (cli.py, ui_helpers.py)
"""
