"""Command line tools (run with python -m fsmstudio.tools.<name>)."""
