"""
Next Ball - ball-by-ball cricket prediction game
"""
__version__ = "0.1.0"
