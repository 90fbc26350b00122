"""Security checks applied to untrusted package content.

Import from submodules:
- paths: sanitize_folder_name, sanitize_file_name, is_path_within_directory
- mcp: validate_mcp_content
- globs: validate_globs
- package_name: validate_package_name, normalize_package_name
"""
