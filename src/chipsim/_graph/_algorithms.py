"""Graph algorithms for dependency graph operations."""

from collections.abc import Collection, Hashable, Mapping
from typing import TypeVar

T = TypeVar("T", bound=Hashable)


def find_cycle(successors: Mapping[T, Collection[T]]) -> list[T] | None:
    """Find one cycle in a graph, if any.

    Given a graph represented as a mapping from nodes to their successors,
    walk it depth-first and return the first cycle encountered.

    Args:
        successors: Mapping from node to the nodes it points to.

    Returns:
        The nodes of a cycle in edge order, starting and ending with the same
        node, or None if the graph is acyclic.

    Example:
        >>> find_cycle({"a": ["b"], "b": ["c"], "c": ["a"]})
        ['a', 'b', 'c', 'a']
        >>> find_cycle({"a": ["b"], "b": []}) is None
        True

    """
    done: set[T] = set()

    for start in successors:
        if start in done:
            continue

        # Iterative DFS; `path` mirrors the stack so a back edge can be sliced out
        path: list[T] = [start]
        on_path: set[T] = {start}
        stack = [iter(successors.get(start, ()))]

        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                finished = path.pop()
                on_path.discard(finished)
                done.add(finished)
                continue
            if node in on_path:
                return [*path[path.index(node) :], node]
            if node in done:
                continue
            path.append(node)
            on_path.add(node)
            stack.append(iter(successors.get(node, ())))

    return None
