"""Utility for reading descriptions out of SKILL.md and README.md text."""

import re
from typing import Any

import yaml

DESCRIPTION_LIMIT = 200

_FRONTMATTER = re.compile(r"^---\s*\n(.*?)\n---\s*(?:\n|$)", re.DOTALL)


class SkillParseError(Exception):
    """Raised when SKILL.md frontmatter cannot be parsed."""

    pass


def parse_frontmatter(content: str) -> dict[str, Any]:
    """
    Extract the YAML frontmatter of a SKILL.md document.

    Args:
        content: Full text of the document

    Returns:
        The frontmatter mapping

    Raises:
        SkillParseError: If there is no frontmatter or it is not a mapping
    """
    match = _FRONTMATTER.match(content)
    if not match:
        raise SkillParseError("No YAML frontmatter found")

    try:
        metadata = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise SkillParseError(f"Invalid YAML frontmatter: {e}") from e

    if not isinstance(metadata, dict):
        raise SkillParseError("YAML frontmatter must be a dictionary")
    return metadata


def description_from_skill_md(content: str) -> str | None:
    """Return the frontmatter ``description`` of a SKILL.md, if any."""
    try:
        metadata = parse_frontmatter(content)
    except SkillParseError:
        return None
    description = str(metadata.get("description") or "").strip()
    return description[:DESCRIPTION_LIMIT] or None


def description_from_readme(content: str) -> str | None:
    """Return the first non-empty line of a README that is not a heading."""
    for line in content.split("\n"):
        if line.strip() and not line.startswith("#"):
            return line.strip()[:DESCRIPTION_LIMIT]
    return None
