"""
models/course.py
----------------
Domain model for catalog entries (courses).
"""

import uuid
from dataclasses import dataclass, field


@dataclass
class Course:
    """
    Represents a single course in the catalog.

    Attributes:
        name: Unique course name.
        url: Link to the course material.
        text: Free-text description.
        id: Identifier assigned by the caller before insertion, never changed.
    """
    name: str
    url: str
    text: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def to_dict(self) -> dict:
        return {"id": str(self.id), "name": self.name, "url": self.url, "text": self.text}

    def __str__(self) -> str:
        return f"{self.name} <{self.url}>"
