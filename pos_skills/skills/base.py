"""
Skill and Command definitions: each command maps 1:1 to one POS endpoint.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
from urllib.parse import quote

from pos_skills.errors import UsageError
from pos_skills.services.pos_client import PosRequest
from pos_skills.utils.config import PosConfig

HELP_COMMANDS = ("help", "--help", "-h")


@dataclass(frozen=True)
class Command:
    """
    One subcommand of a skill.

    path is a template with {shop_id} and, for commands that take a
    resource id, {resource_id}. Read commands accept an optional literal
    query string; write commands read their body from stdin.
    """
    name: str
    method: str
    path: str
    summary: str
    writes: bool = False
    takes_query: bool = False
    default_query: str = ""
    resource_id: Optional[str] = None  # argument name, e.g. "PURCHASE_ID"

    @property
    def usage(self) -> str:
        if self.resource_id:
            return f"{self.name} <id>"
        if self.takes_query:
            return f"{self.name} [query]"
        return self.name

    def parse_args(self, args: Sequence[str]) -> Dict[str, str]:
        """Pick the resource id and query out of positional args. Extra args are ignored."""
        parsed = {"query": "", "resource_id": ""}
        if self.resource_id:
            if not args or not args[0]:
                raise UsageError(f"{self.resource_id} required")
            parsed["resource_id"] = args[0]
        elif self.takes_query:
            parsed["query"] = args[0] if args else ""

        if self.takes_query and not parsed["query"]:
            parsed["query"] = self.default_query
        return parsed

    def build_request(self, config: PosConfig, args: Sequence[str], body: Optional[bytes] = None) -> PosRequest:
        parsed = self.parse_args(args)
        path = self.path.format(
            shop_id=quote(config.shop_id, safe=""),
            resource_id=quote(parsed["resource_id"], safe=""),
        )
        return PosRequest(method=self.method, path=path, query=parsed["query"], body=body)


@dataclass(frozen=True)
class Skill:
    """A named group of commands against one POS resource, plus its help text."""
    name: str
    summary: str
    commands: List[Command] = field(default_factory=list)
    help_text: str = ""

    @property
    def program(self) -> str:
        return f"pos-{self.name}"

    def get_command(self, name: str) -> Command:
        for command in self.commands:
            if command.name == name:
                return command
        raise UsageError(f"Unknown command: {name}\nRun '{self.program} help' for usage")
