from dataclasses import dataclass


@dataclass
class Category:
    """A named tag assignable to many articles."""

    id: int
    name: str
