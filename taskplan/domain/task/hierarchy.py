"""Task hierarchy resolution from dot-segmented task numbers.

Parent/child relations are never stored authoritatively; they are
derived from the numbering scheme. Storage ids are only known after the
tasks have been created, so resolution works over an arena map
(task number -> id) built in a first pass.

All functions in this module are pure - no I/O, no side effects.
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import NamedTuple, TypeVar

from taskplan.domain.task.models import Task, TaskTreeNode
from taskplan.domain.types import number_sort_key, parent_number

T = TypeVar("T")


class ParentLink(NamedTuple):
    """A resolved child -> parent relation."""

    child_number: str
    child_id: str
    parent_number: str
    parent_id: str


def resolve_parents(number_to_id: Mapping[str, str]) -> list[ParentLink]:
    """Resolve parent links for every task whose parent is in the batch.

    Only the direct parent number is looked up. When it is absent the
    task stays unlinked, even if a more distant ancestor exists.

    Args:
        number_to_id: Task number -> storage id for the whole batch

    Returns:
        Links ordered by child task number
    """
    links: list[ParentLink] = []
    for number in sorted(number_to_id, key=number_sort_key):
        parent = parent_number(number)
        if parent is None or parent not in number_to_id:
            continue
        links.append(
            ParentLink(
                child_number=number,
                child_id=number_to_id[number],
                parent_number=parent,
                parent_id=number_to_id[parent],
            )
        )
    return links


def sort_by_number(tasks: Iterable[Task]) -> list[Task]:
    """Order tasks segment-wise by task number ("1.9" before "1.10")."""
    return sorted(tasks, key=lambda task: number_sort_key(task.task_number))


def build_tree(tasks: Iterable[Task]) -> list[TaskTreeNode]:
    """Rebuild the task tree from stored parent links.

    Tasks whose parent id is missing or unknown become roots.

    Returns:
        Root nodes, children ordered by task number
    """
    ordered = sort_by_number(tasks)
    nodes = {task.id: TaskTreeNode(task=task) for task in ordered}
    roots: list[TaskTreeNode] = []

    for task in ordered:
        node = nodes[task.id]
        parent = nodes.get(task.parent_id) if task.parent_id else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.children.append(node)
    return roots


def walk_tree(roots: list[TaskTreeNode]) -> Iterator[tuple[TaskTreeNode, int]]:
    """Yield every node with its depth (0 for roots), depth-first."""

    def walk(node: TaskTreeNode, depth: int) -> Iterator[tuple[TaskTreeNode, int]]:
        yield node, depth
        for child in node.children:
            yield from walk(child, depth + 1)

    for root in roots:
        yield from walk(root, 0)


def fold_tree(
    roots: list[TaskTreeNode],
    initial: T,
    f: Callable[[T, TaskTreeNode, int], T],
) -> T:
    """Fold over all nodes in depth-first order with their depth.

    Args:
        roots: Root nodes of the tree
        initial: Starting accumulator value
        f: Function (accumulator, node, depth) -> new_accumulator

    Returns:
        Final accumulated value after visiting all nodes
    """
    result = initial
    for node, depth in walk_tree(roots):
        result = f(result, node, depth)
    return result


def count_by_depth(roots: list[TaskTreeNode]) -> dict[int, int]:
    """Count tasks per tree level."""

    def count(acc: dict[int, int], node: TaskTreeNode, depth: int) -> dict[int, int]:
        acc[depth] = acc.get(depth, 0) + 1
        return acc

    return fold_tree(roots, {}, count)
