"""
Pancake POS MCP server: exposes the skill commands as agent tools.

Same resolver, write guard and dispatcher as the CLI, so write tools still
require CONFIRM_WRITE=YES in the server's environment.
"""
from mcp.server.fastmcp import FastMCP

from pos_skills.errors import PosSkillError, RemoteAPIError, UsageError
from pos_skills.services.command_service import execute_command
from pos_skills.skills.registry import get_skill, skills_overview
from pos_skills.utils.config import get_settings, load_environment
from pos_skills.utils.structured_logging import configure_logging, get_logger

logger = get_logger(__name__)

mcp = FastMCP("pancake-pos")


def _decode(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


@mcp.tool()
async def list_skills() -> str:
    """
    List the available POS skills and their commands.
    Commands marked (write) change shop data and need run_write_command.
    """
    return skills_overview()


@mcp.tool()
async def run_read_command(skill: str, command: str, query: str = "") -> str:
    """
    Run a read-only POS command and return the raw JSON response.
    Args:
        skill: Skill name, e.g. "suppliers" or "employees".
        command: Command name, e.g. "list" or "purchases".
        query: Optional literal query string, e.g. "?page=1&page_size=50".
    """
    try:
        target = get_skill(skill)
        cmd = target.get_command(command)
        if cmd.writes:
            raise UsageError(f"{command} changes shop data; use run_write_command")
        args = [query] if query else []
        response = await execute_command(target, cmd, args, get_settings())
        if not response.ok:
            raise RemoteAPIError(response.method, response.path, response.status_code, response.content)
        return _decode(response.content)
    except RemoteAPIError as e:
        return f"ERROR: {e}\n{_decode(e.body)}"
    except PosSkillError as e:
        logger.warning(f"{skill} {command} rejected: {e}")
        return f"ERROR: {e}"


@mcp.tool()
async def run_write_command(skill: str, command: str, body_json: str, resource_id: str = "") -> str:
    """
    Run a POS command that changes shop data. Requires CONFIRM_WRITE=YES on the server.
    Confirm ids with a read command first.
    Args:
        skill: Skill name, e.g. "suppliers".
        command: Command name, e.g. "update-purchase" or "split-purchase".
        body_json: JSON request body, forwarded unchanged.
        resource_id: Id of the resource to change, for commands that take one.
    """
    try:
        target = get_skill(skill)
        cmd = target.get_command(command)
        if not cmd.writes:
            raise UsageError(f"{command} is read-only; use run_read_command")
        args = [resource_id] if resource_id else []
        body = body_json.encode("utf-8")
        response = await execute_command(target, cmd, args, get_settings(), read_body=lambda: body)
        if not response.ok:
            raise RemoteAPIError(response.method, response.path, response.status_code, response.content)
        return _decode(response.content)
    except RemoteAPIError as e:
        return f"ERROR: {e}\n{_decode(e.body)}"
    except PosSkillError as e:
        logger.warning(f"{skill} {command} rejected: {e}")
        return f"ERROR: {e}"


def main() -> None:
    load_environment()
    configure_logging(get_settings())
    mcp.run()


if __name__ == "__main__":
    main()
