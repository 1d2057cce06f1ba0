"""makemkvcon process integration.

Builds makemkvcon command lines, runs them, and exposes the results through
an async service. Parsing is delegated to ``mkvcon.robot``.
"""
