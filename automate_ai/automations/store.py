"""Local automations.yaml access.

Reads automation ids, appends generated automations, and removes
single automations while leaving every other byte of the file intact.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
from pathlib import Path

import yaml

from automate_ai.exceptions import AutomationFileError

logger = logging.getLogger(__name__)

# A list item whose first key is a single-quoted id, e.g. "- id: '1718000000000'"
_ID_LINE = re.compile(r"^\s*- id:\s*'([^']*)'")


def extract_local_ids(text: str) -> list[str]:
    """Extract automation ids from automations.yaml text.

    Lines that are not shaped like ``- id: '<value>'`` are skipped.

    Args:
        text: File contents

    Returns:
        Ids in file order (duplicates kept)
    """
    ids = []
    for line in text.splitlines():
        match = _ID_LINE.match(line)
        if match:
            ids.append(match.group(1))
    return ids


def _line_start(text: str, index: int) -> int:
    return text.rfind("\n", 0, index) + 1


def _item_start(text: str, node: yaml.Node) -> int:
    """Offset of the line holding the sequence dash for an item node."""
    index = node.start_mark.index
    start = _line_start(text, index)
    # Dash on its own line above the mapping
    while "-" not in text[start:index] and start > 0:
        start = _line_start(text, start - 1)
    return start


def _mapping_id(node: yaml.Node) -> str | None:
    if not isinstance(node, yaml.MappingNode):
        return None
    for key_node, value_node in node.value:
        if key_node.value == "id" and isinstance(value_node, yaml.ScalarNode):
            return str(value_node.value)
    return None


def find_automation_spans(text: str, automation_id: str) -> list[tuple[int, int]]:
    """Locate the source spans of automations whose ``id`` equals automation_id.

    Each span runs from the start of the item's dash line to the start of
    the next item (or end of file), so trailing blank lines and comments
    belong to the preceding automation.

    Args:
        text: automations.yaml contents
        automation_id: Exact id to match

    Returns:
        (start, end) character offsets in ascending order

    Raises:
        AutomationFileError: If the text is not a YAML block sequence
    """
    try:
        root = yaml.compose(text)
    except yaml.YAMLError as e:
        raise AutomationFileError(f"Automations file is not valid YAML: {e}") from e

    if root is None:
        return []
    if not isinstance(root, yaml.SequenceNode) or root.flow_style:
        raise AutomationFileError("Automations file must be a block sequence of automations.")

    items = root.value
    spans = []
    for i, node in enumerate(items):
        if _mapping_id(node) != automation_id:
            continue
        start = _item_start(text, node)
        end = _item_start(text, items[i + 1]) if i + 1 < len(items) else len(text)
        spans.append((start, end))
    return spans


def remove_automation_text(text: str, automation_id: str) -> tuple[str, int]:
    """Cut every automation with the given id out of the text.

    Returns:
        (new text, number of automations removed)
    """
    spans = find_automation_spans(text, automation_id)
    for start, end in reversed(spans):
        text = text[:start] + text[end:]
    return text, len(spans)


class AutomationsFile:
    """The local automations.yaml, the source of truth for automations."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def read_text(self) -> str:
        """Read the file, preserving line endings.

        Raises:
            AutomationFileError: If the file is missing or unreadable
        """
        if not self.path.is_file():
            raise AutomationFileError(
                f"Automations file not found at '{self.path}'.", path=self.path
            )
        try:
            with self.path.open(encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise AutomationFileError(
                f"Could not read automations file '{self.path}': {e}", path=self.path
            ) from e

    def local_ids(self) -> list[str]:
        """Automation ids currently present in the file."""
        return extract_local_ids(self.read_text())

    def append(self, yaml_text: str) -> None:
        """Append an automation, separated from the previous one by a newline.

        Raises:
            AutomationFileError: If the file does not exist
        """
        if not self.path.is_file():
            raise AutomationFileError(
                f"Automations file not found at '{self.path}'.", path=self.path
            )
        lines = [line.rstrip() for line in yaml_text.splitlines()]
        cleaned = "\n".join(line for line in lines if line)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(f"\n{cleaned}\n")
        logger.info("Automation appended to %s.", self.path)

    def remove(self, automation_id: str) -> int:
        """Remove the automation(s) with the given id and rewrite the file.

        The file is left untouched when no automation matches.

        Returns:
            Number of automations removed
        """
        text = self.read_text()
        new_text, removed = remove_automation_text(text, automation_id)
        if not removed:
            logger.warning("No automation with ID '%s' found in %s.", automation_id, self.path)
            return 0

        if not new_text.strip() and text.strip():
            logger.warning(
                "Automations file is empty after removing '%s'; it was the only automation.",
                automation_id,
            )
        self.write_atomic(new_text)
        logger.info("Removed automation with ID '%s' from %s.", automation_id, self.path)
        return removed

    def write_atomic(self, text: str) -> None:
        """Write via a temporary file in the same directory, then rename over the original."""
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            if self.path.exists():
                shutil.copymode(self.path, tmp_path)
            os.replace(tmp_path, self.path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise AutomationFileError(
                f"Could not rewrite automations file '{self.path}': {e}", path=self.path
            ) from e
