from dataclasses import dataclass


@dataclass
class User:
    """An account allowed into the admin area. ``password`` is a passlib hash."""

    username: str
    password: str
    id: int | None = None
