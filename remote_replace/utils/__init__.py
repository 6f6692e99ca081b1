"""
Utility helpers: path mapping, formatting and structured event logging.
"""
