"""Store access helpers shared by the MCP tools."""

import logging
from pathlib import Path

from pydantic import ValidationError

from taskplan_mcp.config import PlannerConfig
from taskplan_mcp.exceptions import StoreIOError, TaskValidationError
from taskplan_mcp.models.planning import ComplexityReport
from taskplan_mcp.store import TaskSnapshot, TaskStore, read_json

logger = logging.getLogger(__name__)


def _get_config() -> PlannerConfig:
    """
    Configuration for the current tool call.

    Raises:
        TaskValidationError: if an environment override is invalid
    """
    try:
        return PlannerConfig.from_env()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        raise TaskValidationError(f"Invalid configuration - {e}") from e


def _load_snapshot(config: PlannerConfig) -> tuple[TaskStore, TaskSnapshot]:
    """
    Open the configured task store and load a snapshot.

    Returns:
        Tuple of (store, snapshot)

    Raises:
        StoreIOError: if the task file cannot be read
    """
    store = TaskStore(config.tasks_file)
    return store, store.load()


def _read_complexity_report(path: Path) -> ComplexityReport | None:
    """
    Load a saved complexity report, or ``None`` if there is none.

    Raises:
        StoreIOError: if the file exists but is not a valid report
    """
    raw = read_json(path)
    if raw is None:
        return None
    try:
        return ComplexityReport.model_validate(raw)
    except ValidationError as e:
        logger.error(f"Invalid complexity report at {path}: {e}")
        raise StoreIOError(f"Invalid complexity report at {path} - {e}") from e
