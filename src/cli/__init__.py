"""
Command-line package.

`main.py` at the repo root delegates here; nothing in this package knows what the
application does beyond its async `execute()`.
"""
