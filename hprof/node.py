from typing import Dict, Iterator, Optional, Tuple


class TimerNode:
    """
    Accumulated timing for one named region during a single frame.

    A node is identified by its name together with its parent: the same name
    under two different parents gives two unrelated nodes.

    Attributes:
        name (str): Region name, compared by exact equality.
        self_duration (int): Nanoseconds accumulated over every enter/leave
            bracket of this node in the frame. Nested children run inside the
            bracket, so their time is included here.
        calls (int): Number of times the region was entered in the frame.
        children (dict): Child nodes keyed by name, in first-entered order.
    """
    def __init__(self, name: str):
        self.name = name
        self.self_duration = 0
        self.calls = 0
        self.children: Dict[str, "TimerNode"] = {}

    def __repr__(self):
        return (f"TimerNode(name={self.name!r}, self_duration={self.self_duration}, "
                f"calls={self.calls}, children={len(self.children)})")

    def child(self, name: str) -> "TimerNode":
        """Return the child called `name`, creating and appending it on first use."""
        node = self.children.get(name)
        if node is None:
            node = TimerNode(name)
            self.children[name] = node
        return node

    def add_sample(self, elapsed_ns: int):
        self.self_duration += int(elapsed_ns)

    @property
    def exclusive_duration(self) -> int:
        """Time spent in this region outside any of its children."""
        nested = sum(c.self_duration for c in self.children.values())
        return max(self.self_duration - nested, 0)

    def tree_duration(self) -> int:
        """Sum of `self_duration` over every node below this one."""
        return sum(c.self_duration + c.tree_duration() for c in self.children.values())

    def walk(self, depth: int = 0, parent: Optional["TimerNode"] = None
             ) -> Iterator[Tuple[int, Optional["TimerNode"], "TimerNode"]]:
        """
        Depth-first, pre-order traversal in insertion order.

        Yields:
            (depth, parent, node) tuples, starting with this node.
        """
        yield depth, parent, self
        for c in self.children.values():
            yield from c.walk(depth + 1, self)

    def find(self, *path: str) -> Optional["TimerNode"]:
        """Follow child names from this node; None if any step is missing."""
        node = self
        for name in path:
            node = node.children.get(name)
            if node is None:
                return None
        return node
