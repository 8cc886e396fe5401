"""
Source scanner for i18n-routes.

Recursively lists source files and extracts the translatable path segments
and texts marked with `i18n.path("/...")` and `i18n.text("...")`.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from i18n_routes.models import TokenSet

logger = logging.getLogger(__name__)

# `i18n.path("/dashboard/")`: the literal keeps its surrounding slashes
PATH_TOKEN_PATTERN = re.compile(r"""i18n\.path\(\s*["']([^"']+)["']\)""", re.DOTALL)

# `i18n.text("Add website")`, possibly split over several lines
TEXT_TOKEN_PATTERN = re.compile(r"""i18n\.text\(\s*["']([^"']+?)["']""", re.DOTALL)


def is_directory_entry(name: str) -> bool:
    """Entries without a filename extension are treated as directories."""
    return not os.path.splitext(name)[1]


def get_directory_files(directory: Path | str) -> list[str]:
    """
    List all files below a directory as slash-separated relative paths.

    Args:
        directory: Directory to list.

    Returns:
        Relative file paths, e.g. ["index.astro", "[locale]/dashboard.astro"].
    """
    directory = Path(directory)
    files: list[str] = []

    for entry in sorted(os.listdir(directory)):
        if is_directory_entry(entry):
            nested = get_directory_files(directory / entry)
            files.extend(f"{entry}/{nested_file}" for nested_file in nested)
        else:
            files.append(entry)

    return files


def extract_tokens(content: str) -> TokenSet:
    """Extract path and text tokens from one file's content."""
    tokens = TokenSet()

    for match in PATH_TOKEN_PATTERN.finditer(content):
        path = match.group(1)[1:-1]
        if path:
            tokens.paths.add(path)

    for match in TEXT_TOKEN_PATTERN.finditer(content):
        text = match.group(1)
        if text:
            tokens.texts.add(text)

    return tokens


class TokenScanner:
    """Scans a source tree for translation tokens."""

    def extract(self, root_dir: Path | str) -> TokenSet:
        """
        Extract all tokens from the files below a directory.

        Args:
            root_dir: Source directory to scan.

        Returns:
            Deduplicated path and text tokens.
        """
        root_dir = Path(root_dir)
        if not root_dir.exists():
            raise FileNotFoundError(f"Source directory not found: {root_dir}")

        if not root_dir.is_dir():
            raise ValueError(f"Not a directory: {root_dir}")

        tokens = TokenSet()
        files = get_directory_files(root_dir)

        for relative_path in files:
            content = (root_dir / relative_path).read_text(encoding="utf-8", errors="ignore")
            file_tokens = extract_tokens(content)
            if file_tokens:
                logger.debug(
                    "%s: %d paths, %d texts",
                    relative_path,
                    len(file_tokens.paths),
                    len(file_tokens.texts),
                )
            tokens.update(file_tokens)

        logger.info(
            "Extracted %d paths and %d texts from %d files",
            len(tokens.paths),
            len(tokens.texts),
            len(files),
        )
        return tokens
