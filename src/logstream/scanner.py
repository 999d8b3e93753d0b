"""Logfile discovery.

Walks a directory tree and collects every regular file whose full path
matches a sort pattern. The walk is best effort: unreadable directories are
skipped and never fail the scan.
"""

from __future__ import annotations

import logging
import os
import re
from typing import List, Union

from .logging_utils import render_fields_block
from .models import LogFile

LOGGER = logging.getLogger(__name__)


def _log_walk_error(exc: OSError) -> None:
    LOGGER.debug(
        render_fields_block(
            "Skipping Unreadable Path",
            {
                "Path": exc.filename,
                "Reason": exc.strerror or exc,
            },
        )
    )


def scan_directory_for_logfiles(directory: Union[str, os.PathLike[str]], file_match: Union[str, re.Pattern[str]]) -> List[LogFile]:
    """Return an unparsed LogFile for every file under ``directory`` matching ``file_match``.

    Args:
        directory: Root of the tree to scan
        file_match: Pattern searched for in each file's full path

    Returns:
        LogFile records with only ``path`` set, in sorted walk order
    """
    regex = re.compile(file_match) if isinstance(file_match, str) else file_match
    root = os.fspath(directory)
    files: List[LogFile] = []

    if not os.path.exists(root):
        LOGGER.warning(render_fields_block("Log Directory Missing", {"Path": root}))
        return files

    if not os.path.isdir(root):
        if regex.search(root):
            files.append(LogFile(path=root))
        return files

    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        dirnames.sort()
        for name in sorted(filenames):
            path = os.path.join(dirpath, name)
            if regex.search(path):
                files.append(LogFile(path=path))

    return files
