"""
PySide6 front end for the tuner.
"""
