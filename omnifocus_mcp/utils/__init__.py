"""Utility functions for OmniFocus MCP."""

from omnifocus_mcp.utils.cli import _get_database, _run_osascript, _run_script_result
from omnifocus_mcp.utils.escaping import (
    _applescript_bool,
    _applescript_date,
    _applescript_list,
    _escape_applescript,
    _quote_applescript,
)
from omnifocus_mcp.utils.formatters import (
    _compute_tag_prefixes,
    _format_compact_date,
    _format_compact_report,
    _format_duration,
    _format_task_details,
)
from omnifocus_mcp.utils.parsers import _enrich_task_details, _find_task, _parse_database
from omnifocus_mcp.utils.scripts import (
    _build_add_project_script,
    _build_add_task_script,
    _build_dump_script,
    _build_edit_item_script,
    _build_remove_item_script,
)

__all__ = [
    "_run_osascript",
    "_run_script_result",
    "_get_database",
    "_escape_applescript",
    "_quote_applescript",
    "_applescript_list",
    "_applescript_bool",
    "_applescript_date",
    "_parse_database",
    "_find_task",
    "_enrich_task_details",
    "_compute_tag_prefixes",
    "_format_compact_date",
    "_format_duration",
    "_format_compact_report",
    "_format_task_details",
    "_build_dump_script",
    "_build_add_task_script",
    "_build_add_project_script",
    "_build_edit_item_script",
    "_build_remove_item_script",
]
