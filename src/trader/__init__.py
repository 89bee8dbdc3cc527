"""
Trader application package.

The process entrypoint remains `main.py` at the repo root; argument handling and
the run lifecycle live under `src/cli/`, the application itself lives here.
"""
