#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/utils/encoding.py
"""Character encoding detection for source files.

EML and markup sources are read as bytes and decoded here, so files saved
in a legacy code page convert the same as UTF-8 ones.
"""

from __future__ import annotations

import logging
from typing import IO

import chardet

logger = logging.getLogger(__name__)


def detect_encoding(
    data: bytes,
    sample_size: int = 8192,
    confidence_threshold: float = 0.7,
) -> str | None:
    """Detect character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of bytes to sample for detection (uses first N bytes)
    confidence_threshold : float, default 0.7
        Minimum confidence level (0.0-1.0) required to trust detection

    Returns
    -------
    str | None
        Detected encoding name, or None when detection fails or the
        confidence is below the threshold

    """
    sample = data[:sample_size]
    result = chardet.detect(sample)

    if not result or not result.get("encoding"):
        logger.debug("chardet: No encoding detected")
        return None

    encoding = result["encoding"]
    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")

    if confidence >= confidence_threshold:
        return encoding
    logger.debug(f"chardet confidence {confidence:.2f} below threshold {confidence_threshold}")
    return None


def read_text_with_encoding_detection(
    data: bytes,
    fallback_encodings: list[str] | None = None,
    use_chardet: bool = True,
) -> str:
    """Decode binary data as text with automatic encoding detection.

    Strategies, in order: chardet detection, each fallback encoding, and
    finally UTF-8 with replacement characters.

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : list[str] | None, default None
        Encodings to try in order. Defaults to
        ``['utf-8', 'utf-8-sig', 'latin-1']``.
    use_chardet : bool, default True
        Whether to attempt chardet-based detection first

    Returns
    -------
    str
        Decoded text content

    Examples
    --------
    >>> read_text_with_encoding_detection(b"div { Hi }")
    'div { Hi }'

    """
    if fallback_encodings is None:
        fallback_encodings = ["utf-8", "utf-8-sig", "latin-1"]

    # A UTF-8 BOM would otherwise survive as U+FEFF in front of the first tag
    if data.startswith(b"\xef\xbb\xbf"):
        return data[3:].decode("utf-8", errors="replace")

    if use_chardet:
        detected_encoding = detect_encoding(data)
        if detected_encoding:
            try:
                return data.decode(detected_encoding)
            except (UnicodeDecodeError, LookupError) as e:
                logger.debug(f"Failed to decode with chardet-detected encoding {detected_encoding}: {e}")

    for encoding in fallback_encodings:
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")
            continue

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


def normalize_stream_to_text(stream: IO[bytes] | IO[str]) -> str:
    """Read a binary or text file-like object and return its text.

    Parameters
    ----------
    stream : IO[bytes] or IO[str]
        File-like object to read from

    Returns
    -------
    str
        Decoded text content

    Raises
    ------
    TypeError
        If ``stream.read()`` returns something other than bytes or str

    """
    content = stream.read()

    if isinstance(content, bytes):
        return read_text_with_encoding_detection(content)
    elif isinstance(content, str):
        return content
    raise TypeError(f"Stream read() returned unexpected type {type(content).__name__}. Expected bytes or str.")
