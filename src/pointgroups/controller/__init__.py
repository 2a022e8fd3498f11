"""
The CONTROLLER layer turns user input into model changes.

Note: This module should be pure Python/NumPy and should NOT import PySide6.
"""
