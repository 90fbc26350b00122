"""Lookup from package type to handler."""

from cpm.constants import PackageType
from cpm.errors import HandlerNotFoundError
from cpm.handlers.abc import PackageHandler
from cpm.models.manifest import McpContent, PackageManifest, RulesContent, SkillContent


class HandlerRegistry:
    """Handlers registered for one platform, keyed by package type."""

    def __init__(self, handlers: list[PackageHandler] | None = None) -> None:
        self._handlers: dict[PackageType, PackageHandler] = {}
        for handler in handlers or []:
            self.register(handler)

    def register(self, handler: PackageHandler) -> None:
        """Register a handler, replacing any existing one for its type."""
        self._handlers[handler.package_type] = handler

    def has_handler(self, package_type: PackageType) -> bool:
        return package_type in self._handlers

    def get_handler(self, package_type: PackageType) -> PackageHandler:
        """Return the handler for a type.

        Raises:
            HandlerNotFoundError: If none is registered
        """
        if package_type not in self._handlers:
            raise HandlerNotFoundError(package_type)
        return self._handlers[package_type]

    def registered_types(self) -> list[PackageType]:
        return list(self._handlers)

    def handlers(self) -> list[PackageHandler]:
        return list(self._handlers.values())

    def handler_for_payload(self, manifest: PackageManifest) -> PackageHandler | None:
        """Pick a handler from the manifest's content variant.

        Used for types without a dedicated handler (agent, hook, ...). Returns
        None when the content gives nothing to install.
        """
        match manifest.content:
            case SkillContent():
                return self._handlers.get("skill")
            case McpContent():
                return self._handlers.get("mcp")
            case RulesContent() as rules if rules.text:
                return self._handlers.get("rules")
            case _:
                return None
