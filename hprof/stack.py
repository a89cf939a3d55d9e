from typing import List, Optional, Tuple

from hprof.errors import UnbalancedLeaveError
from hprof.node import TimerNode


class StackEntry:
    """One open region: its node, when it was entered and the guard that owns it, if any."""
    def __init__(self, node: TimerNode, start_ns: int, guard=None):
        self.node = node
        self.start_ns = start_ns
        self.guard = guard

    def __repr__(self):
        return f"StackEntry(node={self.node.name!r}, start_ns={self.start_ns})"


class FrameStack:
    """
    The live stack of open regions for a single frame.

    The node of entry i is always a child of the node of entry i-1, or of the
    frame root for i = 0. Nodes are only referenced here; they are owned by
    their parents in the frame tree.
    """
    def __init__(self):
        self.entries: List[StackEntry] = []

    def __len__(self):
        return len(self.entries)

    def top(self) -> Optional[StackEntry]:
        return self.entries[-1] if self.entries else None

    def names(self) -> Tuple[str, ...]:
        """Names of the open regions, outermost first."""
        return tuple(e.node.name for e in self.entries)

    def open(self, root: TimerNode, name: str, now: int, guard=None) -> StackEntry:
        """
        Enter region `name` under the current top (or `root` when nothing is open).

        Args:
            root (TimerNode): Root of the frame being built
            name (str): Region name
            now (int): Timestamp in ns at which the region starts
            guard (ProfileGuard): Guard that will close this entry, if any

        Returns:
            StackEntry: The pushed entry
        """
        top = self.top()
        parent = top.node if top is not None else root
        node = parent.child(name)
        node.calls += 1
        entry = StackEntry(node, now, guard)
        self.entries.append(entry)
        return entry

    def close(self, now: int) -> StackEntry:
        """
        Pop the innermost region and charge it the time since it was entered.

        Raises:
            UnbalancedLeaveError: If no region is open. Nothing is modified.
        """
        if not self.entries:
            raise UnbalancedLeaveError("leave called with no open region")
        entry = self.entries.pop()
        entry.node.add_sample(now - entry.start_ns)
        if entry.guard is not None:
            # the owning guard must not close anything else on exit
            entry.guard.released = True
        return entry

    def index_of(self, entry: StackEntry) -> int:
        """Position of `entry` on the stack, or -1 when it is no longer open."""
        for i in range(len(self.entries) - 1, -1, -1):
            if self.entries[i] is entry:
                return i
        return -1

    def clear(self):
        """Drop every open entry without charging time, detaching their guards."""
        for entry in self.entries:
            if entry.guard is not None:
                entry.guard.released = True
        self.entries.clear()
