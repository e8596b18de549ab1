"""
ConvoStats - word frequency and sentiment statistics for exported
conversation archives.
"""

__version__ = "1.0.0"
