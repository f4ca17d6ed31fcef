"""Custom exceptions for task planning."""


class TaskPlanError(Exception):
    """Base exception for task planning errors."""

    pass


class TaskNotFoundError(TaskPlanError):
    """Exception raised when a task id is not in the store."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task with ID {task_id} not found.")


class TaskValidationError(TaskPlanError):
    """Exception raised for malformed priority, hours or dates."""

    pass


class StoreIOError(TaskPlanError):
    """Exception raised when the task file cannot be read or written."""

    pass


class StoreConflictError(StoreIOError):
    """Exception raised when the task file changed since it was loaded."""

    pass


class CyclicDependencyError(TaskPlanError):
    """Exception raised when task dependencies form one or more cycles."""

    def __init__(self, cycles: list[list[str]]):
        self.cycles = cycles
        rendered = "; ".join(" -> ".join(cycle + cycle[:1]) for cycle in cycles)
        super().__init__(f"Cyclic dependencies detected: {rendered}")
