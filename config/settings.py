"""
Configuration settings for ConvoStats.

Centralized configuration for all pipeline stages and report output.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_ROOT = Path(os.getenv("CONVOSTATS_OUTPUT_DIR", str(Path.home())))

# Report files (overwritten on every run)
RAW_REPORT_FILENAME = "analysis_results.txt"
FILTERED_REPORT_FILENAME = "analysis_results_without_stopwords.txt"
RAW_REPORT_HEADER = "Most common words:"
FILTERED_REPORT_HEADER = "Most common words (without stop words):"
REPORT_MAX_ENTRIES = 100_000

# Words excluded from the filtered frequency table
STOP_WORDS = frozenset([
    "a", "an", "the", "and", "or", "but", "because", "as", "if", "when",
    "while", "of", "at", "by", "for", "with", "about", "against", "between",
    "into", "through", "during", "before", "after", "above", "below", "to",
    "from", "up", "down", "in", "out", "on", "off", "over", "under", "again",
    "further", "then", "once", "here", "there", "all", "any", "both", "each",
    "few", "more", "most", "other", "some", "such", "no", "nor", "not",
    "only", "own", "same", "so", "than", "too", "very", "s", "t", "can",
    "will", "just", "don", "should", "now",
])

# Sentiment scoring
SENTIMENT_BACKEND = os.getenv("CONVOSTATS_SENTIMENT_BACKEND", "vader")  # "vader" or "gemini"

# Gemini backend (only used when SENTIMENT_BACKEND == "gemini")
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")
SENTIMENT_MODEL = "gemini-1.5-flash"
SENTIMENT_TEMPERATURE = 0.0
SENTIMENT_MAX_RETRIES = 3
SENTIMENT_MAX_CHARS = 200_000  # Whole-archive text is truncated beyond this

# Logging
LOG_LEVEL = os.getenv("CONVOSTATS_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "convostats.log"
