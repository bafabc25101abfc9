"""
Registry of available skills, keyed by name.
"""
from typing import Dict

from pos_skills.errors import UsageError
from pos_skills.skills.base import Skill
from pos_skills.skills.employees import EMPLOYEES
from pos_skills.skills.suppliers import SUPPLIERS

SKILLS: Dict[str, Skill] = {skill.name: skill for skill in (SUPPLIERS, EMPLOYEES)}


def get_skill(name: str) -> Skill:
    skill = SKILLS.get(name)
    if skill is None:
        raise UsageError(f"Unknown skill: {name}\nRun 'pos-skills help' for usage")
    return skill


def skills_overview() -> str:
    """Static usage text for the umbrella command."""
    lines = ["Usage: pos-skills <skill> <command> [args]", "", "Skills:"]
    for skill in SKILLS.values():
        lines.append(f"  {skill.name:<12} {skill.summary}")
        for command in skill.commands:
            marker = " (write)" if command.writes else ""
            lines.append(f"    {command.usage:<24} {command.summary}{marker}")
    lines += ["", "Run 'pos-skills <skill> help' for examples and environment variables."]
    return "\n".join(lines) + "\n"
