"""
Pancake POS skill commands: CLI entry points.

    pos-suppliers <command> [args]
    pos-employees <command> [args]
    pos-skills <skill> <command> [args]

The raw API response goes to stdout; messages and logs go to stderr.
"""
import asyncio
import sys
from typing import BinaryIO, List, Optional, TextIO

import httpx

from pos_skills.errors import EXIT_INTERRUPTED, EXIT_OK, PosSkillError, RemoteAPIError, UsageError
from pos_skills.services.command_service import execute_command
from pos_skills.skills.base import HELP_COMMANDS, Skill
from pos_skills.skills.registry import get_skill, skills_overview
from pos_skills.utils.config import PosSettings, get_settings, load_environment
from pos_skills.utils.structured_logging import configure_logging


async def run_skill(
    skill: Skill,
    argv: List[str],
    stdin: BinaryIO,
    stdout: BinaryIO,
    stderr: TextIO,
    settings: Optional[PosSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> int:
    """Run one skill command and return the process exit code."""
    try:
        name = argv[0] if argv else ""
        if name in HELP_COMMANDS:
            stdout.write(skill.help_text.encode("utf-8"))
            stdout.flush()
            return EXIT_OK
        if not name:
            raise UsageError(f"No command given\nRun '{skill.program} help' for usage")

        command = skill.get_command(name)

        settings = settings or get_settings()
        configure_logging(settings)

        response = await execute_command(
            skill,
            command,
            argv[1:],
            settings,
            read_body=stdin.read,
            transport=transport,
        )

        stdout.write(response.content)
        stdout.flush()

        if not response.ok:
            raise RemoteAPIError(response.method, response.path, response.status_code, response.content)
        return EXIT_OK

    except UsageError as e:
        stderr.write(f"{e}\n")
        return e.exit_code
    except PosSkillError as e:
        stderr.write(f"ERROR: {e}\n")
        return e.exit_code


async def run_umbrella(argv: List[str], stdin: BinaryIO, stdout: BinaryIO, stderr: TextIO, **kwargs) -> int:
    """pos-skills <skill> <command> [args]"""
    name = argv[0] if argv else ""
    if not name:
        stderr.write(skills_overview())
        return UsageError.exit_code
    if name in HELP_COMMANDS:
        stdout.write(skills_overview().encode("utf-8"))
        stdout.flush()
        return EXIT_OK

    try:
        skill = get_skill(name)
    except UsageError as e:
        stderr.write(f"{e}\n")
        return e.exit_code
    return await run_skill(skill, argv[1:], stdin, stdout, stderr, **kwargs)


def _entry(coro_factory) -> int:
    load_environment()
    try:
        return asyncio.run(coro_factory())
    except KeyboardInterrupt:
        sys.stderr.write("Interrupted\n")
        return EXIT_INTERRUPTED


def skill_main(skill_name: str, argv: Optional[List[str]] = None) -> int:
    skill = get_skill(skill_name)
    args = sys.argv[1:] if argv is None else argv
    return _entry(lambda: run_skill(skill, args, sys.stdin.buffer, sys.stdout.buffer, sys.stderr))


def suppliers_main() -> None:
    sys.exit(skill_main("suppliers"))


def employees_main() -> None:
    sys.exit(skill_main("employees"))


def main(argv: Optional[List[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    sys.exit(_entry(lambda: run_umbrella(args, sys.stdin.buffer, sys.stdout.buffer, sys.stderr)))


if __name__ == "__main__":
    main()
