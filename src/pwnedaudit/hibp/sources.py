"""
Secret sources: turn password files into AuditItems.

Copyright (c) 2025 The pwnedaudit authors.
Licensed under the MIT License.
"""

import logging
from pathlib import Path
from typing import Iterator

from pwnedaudit.hibp.models import AuditItem

logger = logging.getLogger(__name__)


def parse_secret_text(name: str, content: str) -> AuditItem:
    """Build an AuditItem from the text of a one-password file.

    A trailing newline is fine, but any further non-empty line means the
    file does not hold a single password and the item is skipped. Line
    ending characters are removed; nothing else is trimmed.
    """
    lines = content.split("\n")
    if any(line for line in lines[1:]):
        return AuditItem(name=name, skip_reason="multiple lines")

    password = content.replace("\n", "").replace("\r", "")
    if not password:
        return AuditItem(name=name, skip_reason="empty")

    return AuditItem(name=name, secret=password.encode("utf-8"), display=password)


def read_secret_file(path: str | Path) -> AuditItem:
    """Read one password file."""
    path = Path(path)
    try:
        content = path.read_bytes().decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug(f"{path.name} is not valid UTF-8")
        return AuditItem(name=path.name, skip_reason="not UTF-8 text")

    return parse_secret_text(path.name, content)


def iter_directory(directory: str | Path, pattern: str = "*.txt") -> Iterator[AuditItem]:
    """Yield an AuditItem for each matching file, in name order."""
    directory = Path(directory)
    for path in sorted(p for p in directory.glob(pattern) if p.is_file()):
        yield read_secret_file(path)
