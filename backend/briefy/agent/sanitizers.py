"""
Normalizers for model-generated flowcharts and epics/tasks.

Model output is untrusted input. Every function here is total: it never
raises, it returns a repaired structure or ``None`` when nothing usable is
left. What happens to bad input is decided by the policy tables below rather
than by ad hoc defaults.
"""
import logging
import math
from collections.abc import Mapping
from enum import Enum
from typing import Any, get_args

from briefy.agent.artifacts import (
    Category,
    EpicDraft,
    FlowchartGraph,
    FlowEdge,
    FlowNode,
    NodeType,
    Position,
    TaskDraft,
)

logger = logging.getLogger(__name__)


class Remedy(str, Enum):
    REPAIR = "repair"
    DROP = "drop"


# What to do with an entry that is not an object at all.
MALFORMED_ENTRY_POLICY: dict[str, Remedy] = {
    "node": Remedy.DROP,
    "edge": Remedy.DROP,
    "epic": Remedy.REPAIR,
    "task": Remedy.DROP,
}

# What to do with an object whose fields or references are invalid.
INVALID_FIELD_POLICY: dict[str, Remedy] = {
    "node": Remedy.REPAIR,
    "edge": Remedy.DROP,
    "epic": Remedy.REPAIR,
    "task": Remedy.REPAIR,
}

NODE_TYPES: frozenset[str] = frozenset(get_args(NodeType))
TASK_CATEGORIES: frozenset[str] = frozenset(get_args(Category))
PRIORITIES: frozenset[str] = frozenset({"low", "medium", "high"})
STORY_POINTS: frozenset[int] = frozenset({1, 2, 3, 5, 8, 13})

DEFAULT_NODE_TYPE = "process"
DEFAULT_PRIORITY = "medium"
DEFAULT_STORY_POINTS = 3
DEFAULT_CATEGORY = "frontend"
DEFAULT_DESCRIPTION = "Sem descrição"
PLACEHOLDER_EPIC_DESCRIPTION = "Épico criado automaticamente"


def fallback_position(index: int) -> Position:
    return Position(x=100 + index * 200, y=100)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def _is_integer(value: Any) -> bool:
    if not _is_number(value):
        return False
    return isinstance(value, int) or value.is_integer()


def _as_id(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def _as_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    if _is_number(value):
        return str(value)
    return None


def _priority(value: Any) -> str:
    return value if value in PRIORITIES else DEFAULT_PRIORITY


def _entry(kind: str, raw: Any, index: int) -> Mapping | None:
    """Apply the malformed-entry policy. None means the entry is dropped."""
    if isinstance(raw, Mapping):
        return raw
    if MALFORMED_ENTRY_POLICY[kind] is Remedy.DROP:
        logger.warning("%s %s is not an object, skipping", kind.capitalize(), index)
        return None
    logger.warning("%s %s is not an object, using defaults", kind.capitalize(), index)
    return {}


# Flowchart

def _sanitize_position(raw: Any, index: int) -> Position:
    if isinstance(raw, Mapping) and _is_number(raw.get("x")) and _is_number(raw.get("y")):
        return Position(x=round(raw["x"]), y=round(raw["y"]))
    return fallback_position(index)


def _sanitize_nodes(raw_nodes: list[Any]) -> list[FlowNode]:
    nodes: list[FlowNode] = []
    seen_ids: set[str] = set()
    for index, entry in enumerate(raw_nodes):
        raw = _entry("node", entry, index)
        if raw is None:
            continue

        node_id = _as_id(raw.get("id")) or f"node_{index}"
        if node_id in seen_ids:
            node_id = f"{node_id}_{index}"
        seen_ids.add(node_id)

        node_type = raw.get("type")
        nodes.append(
            FlowNode(
                id=node_id,
                type=node_type if node_type in NODE_TYPES else DEFAULT_NODE_TYPE,
                label=_as_text(raw.get("label")) or f"Nó {index + 1}",
                position=_sanitize_position(raw.get("position"), index),
            )
        )
    return nodes


def _sanitize_edges(raw_edges: list[Any], node_ids: set[str]) -> list[FlowEdge]:
    edges: list[FlowEdge] = []
    seen_ids: set[str] = set()
    for index, entry in enumerate(raw_edges):
        raw = _entry("edge", entry, index)
        if raw is None:
            continue

        source = _as_id(raw.get("source"))
        target = _as_id(raw.get("target"))
        if (source not in node_ids or target not in node_ids) and INVALID_FIELD_POLICY["edge"] is Remedy.DROP:
            # Dangling edges have no sensible default.
            logger.warning("Edge %s references missing nodes (%r -> %r), skipping", index, source, target)
            continue

        edge_id = _as_id(raw.get("id")) or f"edge_{index}"
        if edge_id in seen_ids:
            edge_id = f"{edge_id}_{index}"
        seen_ids.add(edge_id)

        edges.append(
            FlowEdge(
                id=edge_id,
                source=source,
                target=target,
                label=_as_text(raw.get("label")),
            )
        )
    return edges


def sanitize_flowchart(raw: Any) -> FlowchartGraph | None:
    """Repair a generated flowchart. Returns None when no node can be recovered."""
    if not isinstance(raw, Mapping):
        logger.error("Flowchart is not an object: %r", type(raw).__name__)
        return None

    raw_nodes = raw.get("nodes")
    raw_edges = raw.get("edges")
    if not isinstance(raw_nodes, list):
        logger.warning("Flowchart nodes is not a list, using an empty list")
        raw_nodes = []
    if not isinstance(raw_edges, list):
        logger.warning("Flowchart edges is not a list, using an empty list")
        raw_edges = []

    nodes = _sanitize_nodes(raw_nodes)
    if not nodes:
        logger.error("Flowchart must have at least one node")
        return None

    edges = _sanitize_edges(raw_edges, {node.id for node in nodes})
    logger.info("Flowchart validated: %s nodes, %s edges", len(nodes), len(edges))
    return FlowchartGraph(nodes=nodes, edges=edges)


# Epics and tasks

def sanitize_epics(raw_epics: Any) -> list[EpicDraft]:
    if not isinstance(raw_epics, list):
        logger.warning("Epics is not a list")
        return []

    epics: list[EpicDraft] = []
    for index, entry in enumerate(raw_epics):
        raw = _entry("epic", entry, index)
        if raw is None:
            continue

        default_description = DEFAULT_DESCRIPTION if isinstance(entry, Mapping) else PLACEHOLDER_EPIC_DESCRIPTION
        epics.append(
            EpicDraft(
                title=_as_text(raw.get("title")) or f"Épico {index + 1}",
                description=_as_text(raw.get("description")) or default_description,
                priority=_priority(raw.get("priority")),
            )
        )
    return epics


def _story_points(value: Any) -> int:
    # Out-of-scale values fall back to the default, not to the nearest step.
    if _is_integer(value) and int(value) in STORY_POINTS:
        return int(value)
    return DEFAULT_STORY_POINTS


def _epic_index(value: Any, epic_count: int) -> int:
    if _is_integer(value) and 0 <= int(value) < epic_count:
        return int(value)
    return 0


def _criteria(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [text for text in (_as_text(item) for item in value) if text]


def sanitize_tasks(raw_tasks: Any, epic_count: int) -> list[TaskDraft]:
    if not isinstance(raw_tasks, list):
        logger.warning("Tasks is not a list")
        return []

    tasks: list[TaskDraft] = []
    for index, entry in enumerate(raw_tasks):
        raw = _entry("task", entry, index)
        if raw is None:
            continue

        category = raw.get("category")
        tasks.append(
            TaskDraft(
                title=_as_text(raw.get("title")) or f"Task {index + 1}",
                description=_as_text(raw.get("description")) or DEFAULT_DESCRIPTION,
                story_points=_story_points(raw.get("story_points")),
                category=category if category in TASK_CATEGORIES else DEFAULT_CATEGORY,
                epic_index=_epic_index(raw.get("epic_index"), epic_count),
                acceptance_criteria=_criteria(raw.get("acceptance_criteria")),
                priority=_priority(raw.get("priority")),
            )
        )
    return tasks


def sanitize_epics_and_tasks(raw_epics: Any, raw_tasks: Any) -> tuple[list[EpicDraft], list[TaskDraft]]:
    epics = sanitize_epics(raw_epics)
    tasks = sanitize_tasks(raw_tasks, len(epics))
    return epics, tasks
