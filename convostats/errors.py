"""
Error taxonomy for ConvoStats.

Only these errors abort a run. Malformed conversations or nodes are skipped
by the extractor and never raise.
"""


class AnalysisError(Exception):
    """Base class for fatal analysis errors."""


class InputReadError(AnalysisError):
    """Input file could not be read."""


class ParseError(AnalysisError):
    """Input bytes are not valid UTF-8 JSON."""


class ShapeError(AnalysisError):
    """Input is valid JSON but not a list of conversation objects."""


class ReportWriteError(AnalysisError):
    """A report file could not be written."""


class AnalysisInProgressError(RuntimeError):
    """A run was requested while another is still in flight."""
