#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/emlc/utils/io_utils.py
"""I/O utilities for handling output destinations."""

from __future__ import annotations

import io
from io import StringIO
from pathlib import Path
from typing import IO, Union, cast


def write_content(content: str, output: Union[str, Path, IO[bytes], IO[str], None]) -> Union[StringIO, None]:
    """Write rendered text to an output destination or return it as a stream.

    Parameters
    ----------
    content : str
        Rendered document text
    output : str, Path, IO[bytes], IO[str], or None
        Output destination:
        - None: return the content as a StringIO
        - str or Path: write UTF-8 text to that file
        - IO[bytes]: write UTF-8 encoded bytes
        - IO[str]: write text

    Returns
    -------
    StringIO or None
        StringIO when ``output`` is None, otherwise None

    Raises
    ------
    TypeError
        If the output type is not supported
    OSError
        If the file cannot be opened for writing

    Examples
    --------
        >>> write_content("div {}", None).read()
        'div {}'

    """
    if output is None:
        return StringIO(content)

    if isinstance(output, (str, Path)):
        Path(output).write_text(content, encoding="utf-8")
        return None

    if hasattr(output, "write"):
        if isinstance(output, StringIO) or isinstance(output, io.TextIOBase):
            is_binary_mode = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            is_binary_mode = True
        else:
            mode = getattr(output, "mode", "")
            is_binary_mode = isinstance(mode, str) and "b" in mode

        if is_binary_mode:
            cast(IO[bytes], output).write(content.encode("utf-8"))
        else:
            cast(IO[str], output).write(content)
        return None

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["write_content"]
