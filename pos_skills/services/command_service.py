"""
Command Service: guard-then-call execution of one skill command.

Configuration and the write guard are checked before the request body is
read and before any network I/O.
"""
from typing import Callable, Optional, Sequence

import httpx

from pos_skills.errors import UsageError
from pos_skills.services.pos_client import PosClient, PosResponse
from pos_skills.skills.base import Command, Skill
from pos_skills.utils.config import PosSettings, resolve_config
from pos_skills.utils.structured_logging import get_logger
from pos_skills.utils.write_guard import confirm_write, write_confirmation

logger = get_logger(__name__)


async def execute_command(
    skill: Skill,
    command: Command,
    args: Sequence[str],
    settings: PosSettings,
    read_body: Optional[Callable[[], bytes]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> PosResponse:
    """
    Run `command` and return the raw response, whatever its status.

    Raises ConfigurationError, WriteNotConfirmedError or UsageError before
    any request is made, and TransportError if the API is unreachable.
    """
    config = resolve_config(settings)
    log = logger.bind(skill=skill.name, command=command.name)

    if command.writes:
        confirm_write(write_confirmation())
        # Validates the resource id before stdin is consumed
        command.parse_args(args)
        body = read_body() if read_body else b""
        if not body:
            raise UsageError(f"{command.name} expects a JSON body on stdin")
        log.info(f"Write confirmed, forwarding {len(body)} byte body")
    else:
        body = None

    request = command.build_request(config, args, body)
    return await PosClient(config, transport=transport).send(request)
