from typing import List, Optional


class Region:
    """A synthetic unit of work: sleep for `sleep_ms`, then run the children in order."""
    def __init__(self, name: str, sleep_ms: float = 0.0, children: Optional[List["Region"]] = None):
        self.name = name
        self.sleep_ms = float(sleep_ms)
        self.children = children or []

    def __repr__(self):
        return f"Region({self.name!r}, sleep_ms={self.sleep_ms}, children={len(self.children)})"

    @classmethod
    def from_dict(cls, spec: dict) -> "Region":
        """
        Build a region tree from a YAML mapping.

        Args:
            spec (dict): {'name': str, 'sleep_ms': float, 'children': [spec, ...]}
        """
        if "name" not in spec:
            raise ValueError(f"region is missing a 'name': {spec}")
        children = [cls.from_dict(c) for c in spec.get("children") or []]
        return cls(spec["name"], spec.get("sleep_ms", 0.0), children)


def build_regions(specs) -> List[Region]:
    return [Region.from_dict(s) for s in specs or []]
