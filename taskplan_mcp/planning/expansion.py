"""Template-based subtask generation."""

from taskplan_mcp.config import PlannerConfig
from taskplan_mcp.models.task import Subtask, TaskModel
from taskplan_mcp.planning.complexity import estimate_complexity, recommended_subtask_count

# Task category -> (keywords, [(subtask type, description)])
SUBTASK_TEMPLATES: list[tuple[str, tuple[str, ...], list[tuple[str, str]]]] = [
    (
        "setup",
        ("setup", "initialize"),
        [
            ("Research", "Research and gather requirements"),
            ("Design", "Design the architecture and structure"),
            ("Implementation", "Implement the core functionality"),
            ("Configuration", "Configure the system"),
            ("Documentation", "Document the setup process"),
        ],
    ),
    (
        "ui",
        ("ui", "component", "interface"),
        [
            ("Design", "Design the UI component"),
            ("Structure", "Create the component structure"),
            ("Styling", "Style the component"),
            ("Interaction", "Add user interactions"),
            ("Testing", "Test the component"),
        ],
    ),
    (
        "data",
        ("data", "database", "model"),
        [
            ("Schema", "Define the data schema"),
            ("Model", "Create the data model"),
            ("API", "Implement API endpoints"),
            ("Integration", "Integrate with the database"),
            ("Testing", "Test data operations"),
        ],
    ),
    (
        "auth",
        ("auth", "login"),
        [
            ("Provider", "Set up authentication provider"),
            ("Routes", "Create authentication routes"),
            ("UI", "Implement authentication UI"),
            ("Logic", "Implement authentication logic"),
            ("Testing", "Test authentication flow"),
        ],
    ),
    (
        "test",
        ("test",),
        [
            ("Plan", "Create test plan"),
            ("Unit", "Implement unit tests"),
            ("Integration", "Implement integration tests"),
            ("E2E", "Implement end-to-end tests"),
            ("Documentation", "Document test results"),
        ],
    ),
]

DEFAULT_TEMPLATE = [
    ("Research", "Research and gather requirements"),
    ("Design", "Design the solution"),
    ("Implementation", "Implement the solution"),
    ("Testing", "Test the implementation"),
    ("Documentation", "Document the implementation"),
]


def task_category(task: TaskModel) -> str:
    """First template category whose keywords appear in the description."""
    text = (task.description or "").lower()
    for category, keywords, _ in SUBTASK_TEMPLATES:
        if any(keyword in text for keyword in keywords):
            return category
    return "default"


def _template_for(category: str) -> list[tuple[str, str]]:
    for name, _, template in SUBTASK_TEMPLATES:
        if name == category:
            return template
    return DEFAULT_TEMPLATE


def generate_subtasks(task: TaskModel, config: PlannerConfig, count: int | None = None) -> list[Subtask]:
    """
    Generate placeholder subtasks for a task.

    When ``count`` is omitted the complexity recommendation is used. Templates
    cycle when more subtasks are requested than the category defines.
    """
    if count is None:
        count = recommended_subtask_count(estimate_complexity(task), config.default_subtasks)

    template = _template_for(task_category(task))
    subtasks: list[Subtask] = []
    for i in range(count):
        kind, desc = template[i % len(template)]
        subtasks.append(
            Subtask(
                id=f"{task.id}.{i + 1}",
                title=f"{kind} {task.title}".strip(),
                description=f"{desc} for {task.title.lower()}" if task.title else desc,
            )
        )
    return subtasks
