"""Reading whole files."""

from __future__ import annotations

import errno
import os
from typing import Union


def load_entire_file(filename: Union[str, os.PathLike], mode: str = "r") -> Union[str, bytes]:
    """Return the whole content of ``filename``.

    ``mode`` is ``"r"`` for text or ``"rb"`` for bytes. A missing file
    raises :class:`FileNotFoundError`.
    """
    if any(flag in mode for flag in "wax+") or "r" not in mode:
        raise ValueError(f"not a read mode: {mode!r}")
    binary = "b" in mode
    try:
        if binary:
            with open(filename, "rb") as handle:
                return handle.read()
        with open(filename, "r", encoding="utf-8") as handle:
            return handle.read()
    except FileNotFoundError as exc:
        raise FileNotFoundError(
            errno.ENOENT, f'Input File "{os.fspath(filename)}" does not exist.', os.fspath(filename)
        ) from exc