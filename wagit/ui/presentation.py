"""Presentation parameters for the two looks of the edit wizard."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Presentation:
    name: str
    repo_columns: int
    show_icons: bool
    show_language_tags: bool
    show_step_descriptions: bool

    @classmethod
    def styled(cls) -> Presentation:
        return cls(
            name="styled",
            repo_columns=2,
            show_icons=True,
            show_language_tags=True,
            show_step_descriptions=True,
        )

    @classmethod
    def simple(cls) -> Presentation:
        return cls(
            name="simple",
            repo_columns=1,
            show_icons=False,
            show_language_tags=False,
            show_step_descriptions=False,
        )

    @classmethod
    def for_flag(cls, simple: bool) -> Presentation:
        return cls.simple() if simple else cls.styled()

    def label(self, icon: str, text: str) -> str:
        """Prefix ``text`` with ``icon`` when icons are shown."""
        if self.show_icons and icon:
            return f"{icon} {text}"
        return text
