"""Data models for cpm.

Import from submodules:
- registry: RegistryEntry, SearchResult, type_from_path, resolve_package_type
- manifest: PackageManifest, Author, RulesContent, SkillContent, McpContent
- installation: InstallationResult, InstalledPackage, PackageMetadata, InstallStage
- config: CpmConfig, McpConfigDocument
"""
