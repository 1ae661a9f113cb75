"""Task modules live here.

A module contributes tasks by defining `register(runner, ctx)`; the CLI calls
it once at startup with the shared `BuildContext`.

Do not implement logic here unless it's shared helpers; keep tasks modular per file.
"""
