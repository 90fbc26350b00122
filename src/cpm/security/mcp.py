"""Security policy for MCP server launch configurations.

A package may only launch a server through a known runtime, with arguments
that cannot smuggle inline code or shell syntax, and without overriding
environment variables that change how the runtime loads code.
"""

from cpm.constants import ALLOWED_MCP_COMMANDS, BLOCKED_MCP_ARG_PATTERNS, BLOCKED_MCP_ENV_KEYS
from cpm.errors import SecurityValidationError
from cpm.models.manifest import McpContent


def validate_mcp_content(content: McpContent) -> None:
    """Check an MCP launch configuration against the security policy.

    Raises:
        SecurityValidationError: Describing the first violation found
    """
    command = content.command
    if not command:
        raise SecurityValidationError("MCP command is required")

    if "/" in command or "\\" in command:
        raise SecurityValidationError(
            f"MCP command cannot contain path separators: '{command}'. "
            "Use a bare command name like 'npx' instead"
        )

    if command not in ALLOWED_MCP_COMMANDS:
        allowed = ", ".join(sorted(ALLOWED_MCP_COMMANDS))
        raise SecurityValidationError(
            f"MCP command '{command}' is not allowed. Allowed commands: {allowed}"
        )

    for arg in content.args:
        for pattern in BLOCKED_MCP_ARG_PATTERNS:
            if pattern.search(arg):
                raise SecurityValidationError(f"Blocked MCP argument pattern detected: '{arg}'")

    joined = " ".join(content.args)
    for pattern in BLOCKED_MCP_ARG_PATTERNS:
        if pattern.search(joined):
            raise SecurityValidationError("Blocked MCP argument pattern detected in arguments")

    for key in content.env:
        if key.upper() in BLOCKED_MCP_ENV_KEYS:
            raise SecurityValidationError(f"Blocked MCP environment variable: '{key}'")
