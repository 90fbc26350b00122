"""File system I/O for cpm.

Import from submodules:
- archive: extract_archive
- file_lock: FileLock, file_lock
- manifest: parse_manifest, parse_manifest_text, load_manifest_file
- metadata: write_metadata, read_metadata
- config_json: load_cpm_config, save_cpm_config, modify_mcp_config
"""
