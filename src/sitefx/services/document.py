"""Document-level presentation attribute."""

from __future__ import annotations

from typing import Protocol


class DocumentAttributes(Protocol):
    def set_attribute(self, name: str, value: str) -> None:
        ...


class InMemoryDocument:
    def __init__(self) -> None:
        self.attributes: dict[str, str] = {}
        self.history: list[tuple[str, str]] = []

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value
        self.history.append((name, value))

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)
