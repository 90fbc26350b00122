"""Type handlers that write package content to disk.

Import from submodules:
- abc: PackageHandler, InstallContext, UninstallContext
- handler_registry: HandlerRegistry
- rules: RulesHandler
- cursor_rules: CursorRulesHandler
- skill: SkillHandler
- mcp: McpHandler
"""
