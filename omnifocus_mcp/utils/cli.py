"""osascript utilities for OmniFocus interaction."""

import json
import subprocess

from pydantic import ValidationError

from omnifocus_mcp.config import get_settings
from omnifocus_mcp.enums import ScriptLanguage
from omnifocus_mcp.log import get_logger
from omnifocus_mcp.models.database import Database
from omnifocus_mcp.models.results import ScriptResult
from omnifocus_mcp.utils.parsers import _parse_database
from omnifocus_mcp.utils.scripts import _build_dump_script

logger = get_logger(__name__)


def _run_osascript(script: str, language: ScriptLanguage = ScriptLanguage.APPLESCRIPT) -> tuple[bool, str]:
    """
    Execute a script with osascript and return the result.

    The script is sent on stdin, so no shell quoting or temporary file is involved.

    Args:
        script: Program source text
        language: OSA language passed to `osascript -l`

    Returns:
        Tuple of (success: bool, output: str)
    """
    settings = get_settings()
    cmd = [settings.osascript_path, "-l", language.value, "-"]
    logger.debug("Running %s script (%d chars)", language.value, len(script))

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=settings.timeout, input=script)

        output = result.stdout.strip()
        if result.returncode != 0:
            error = result.stderr.strip() or output
            logger.warning("osascript exited with %d: %s", result.returncode, error)
            return False, f"Error: {error}"

        if result.stderr.strip():
            logger.debug("osascript stderr: %s", result.stderr.strip())
        return True, output

    except subprocess.TimeoutExpired:
        logger.error("osascript timed out after %d seconds", settings.timeout)
        return False, f"Error: Script timed out after {settings.timeout} seconds"
    except FileNotFoundError:
        logger.error("osascript executable not found: %s", settings.osascript_path)
        return False, (
            f"Error: '{settings.osascript_path}' was not found. "
            "OmniFocus automation requires macOS with osascript available."
        )
    except Exception as e:
        logger.exception("Unexpected error running osascript")
        return False, f"Error: Unexpected error - {type(e).__name__}: {str(e)}"


def _run_script_result(script: str) -> ScriptResult:
    """
    Run an AppleScript that replies with one JSON object and parse the reply.

    Only the last non-empty line of stdout is parsed, so stray log lines
    printed before the reply are ignored.

    Returns:
        ScriptResult; execution and parse failures become success=False
    """
    success, output = _run_osascript(script)
    if not success:
        return ScriptResult(success=False, error=output.removeprefix("Error: "))

    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        return ScriptResult(success=False, error="Script returned no output")

    try:
        return ScriptResult.model_validate(json.loads(lines[-1]))
    except (json.JSONDecodeError, ValidationError, TypeError):
        logger.warning("Unparseable script reply: %s", output)
        return ScriptResult(success=False, error=f"Failed to parse result: {output}")


def _get_database(include_completed: bool = False) -> tuple[bool, Database | str]:
    """
    Export the OmniFocus database.

    Args:
        include_completed: Also export completed/dropped tasks, done/dropped
            projects, dropped folders and inactive tags

    Returns:
        Tuple of (success: bool, database: Database | error: str)
    """
    script = _build_dump_script(include_completed)
    success, output = _run_osascript(script, ScriptLanguage.JAVASCRIPT)
    if not success:
        return False, output

    try:
        data = json.loads(output) if output else None
    except json.JSONDecodeError as e:
        logger.warning("Database export returned invalid JSON: %.200s", output)
        return False, f"Error: Failed to parse database export - {str(e)}"

    if data is not None and not isinstance(data, dict):
        return False, f"Error: Unexpected database export: {output[:200]}"

    try:
        database = _parse_database(data)
    except ValidationError as e:
        logger.warning("Database export did not match the expected shape: %s", e)
        return False, f"Error: Database export has an unexpected shape - {e.error_count()} problem(s)"

    logger.info(
        "Exported %d tasks, %d projects, %d folders, %d tags",
        len(database.tasks),
        len(database.projects),
        len(database.folders),
        len(database.tags),
    )
    return True, database
