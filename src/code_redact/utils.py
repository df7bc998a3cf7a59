"""
Utility functions for the code redaction tool.

This module provides common utility functions used across the application.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple


def get_timestamp() -> str:
    """
    Get current timestamp in ISO format.

    Returns:
        ISO format timestamp string
    """
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"


def hint_for_path(path: str, extension_hints: Dict[str, str]) -> Optional[str]:
    """
    Pick a language hint from a file's extension.

    Args:
        path: File path
        extension_hints: Mapping of extension (with dot) to language hint

    Returns:
        Language hint, or None to use the default profile
    """
    suffix = Path(path).suffix.lower()
    for extension, hint in (extension_hints or {}).items():
        if extension.lower() == suffix:
            return hint
    return None


def format_mapping(mapping: List[Tuple[str, str]], limit: Optional[int] = None) -> str:
    """
    Format identifier mapping pairs for display.

    Args:
        mapping: Original/substitute pairs
        limit: Maximum number of pairs to show

    Returns:
        Multi-line string, one ``original -> substitute`` per line
    """
    shown = mapping if limit is None else mapping[:limit]
    lines = [f"  {original} -> {substitute}" for original, substitute in shown]
    if limit is not None and len(mapping) > limit:
        lines.append(f"  ... and {len(mapping) - limit} more")
    return "\n".join(lines)


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"
