"""
Document Parser.

Reads the exported archive and decodes it into a list of conversation objects.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from convostats.errors import InputReadError, ParseError, ShapeError

logger = logging.getLogger(__name__)


def read_document(path: Union[str, Path]) -> bytes:
    """
    Read the raw bytes of an exported archive.

    Args:
        path: Path to the JSON export (e.g., conversations.json)

    Returns:
        File contents

    Raises:
        InputReadError: If the file cannot be opened or read
    """
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        logger.error(f"Failed to read {path}: {e}")
        raise InputReadError(str(e)) from e

    logger.info(f"Loaded {len(raw)} bytes from {path}")
    return raw


def parse_document(raw: bytes) -> List[Dict[str, Any]]:
    """
    Decode raw bytes and validate the top-level shape.

    Args:
        raw: UTF-8 encoded JSON (a leading BOM is tolerated)

    Returns:
        List of conversation objects

    Raises:
        ParseError: If the bytes are not valid UTF-8 JSON
        ShapeError: If the document is not a list of objects
    """
    try:
        document = json.loads(raw.decode("utf-8-sig"))
    except UnicodeDecodeError as e:
        raise ParseError(f"Input is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise ParseError(f"Input is not valid JSON: {e}") from e

    if not isinstance(document, list):
        raise ShapeError(
            f"Expected a list of conversations, got {type(document).__name__}"
        )

    for index, conversation in enumerate(document):
        if not isinstance(conversation, dict):
            raise ShapeError(
                f"Conversation {index} is {type(conversation).__name__}, expected an object"
            )

    logger.info(f"Parsed {len(document)} conversations")
    return document


def load_conversations(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read and parse an archive in one step."""
    return parse_document(read_document(path))
