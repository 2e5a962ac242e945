"""Load and export technology trees as JSON files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator

from strategos.domain.enums import Era, TechCategory, UnlockKind
from strategos.domain.models import TechID, Technology, Unlock
from strategos.domain.tech_tree import TechTree, infer_unlock_kind


class UnlockEntry(BaseModel):
    """Unlock as written in a tree file; ``kind`` may be omitted."""

    id: str = Field(min_length=1)
    kind: UnlockKind | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"id": value}
        return value

    def to_domain(self) -> Unlock:
        return Unlock(id=self.id, kind=self.kind or infer_unlock_kind(self.id))


class TechnologyEntry(BaseModel):
    """Technology as written in a tree file."""

    id: str = Field(min_length=1)
    name: str
    era: Era
    category: TechCategory
    cost: dict[str, float] = Field(default_factory=dict)
    research_time: int = Field(ge=0)
    prerequisites: list[str] = Field(default_factory=list)
    effects: dict[str, float] = Field(default_factory=dict)
    unlocks: list[UnlockEntry] = Field(default_factory=list)
    description: str = ""

    def to_domain(self) -> Technology:
        return Technology(
            id=TechID(self.id),
            name=self.name,
            era=self.era,
            category=self.category,
            cost=dict(self.cost),
            research_time=self.research_time,
            prerequisites=tuple(TechID(p) for p in self.prerequisites),
            effects=dict(self.effects),
            unlocks=tuple(unlock.to_domain() for unlock in self.unlocks),
            description=self.description,
        )

    @classmethod
    def from_domain(cls, tech: Technology) -> TechnologyEntry:
        return cls(
            id=tech.id,
            name=tech.name,
            era=tech.era,
            category=tech.category,
            cost=dict(tech.cost),
            research_time=tech.research_time,
            prerequisites=list(tech.prerequisites),
            effects=dict(tech.effects),
            unlocks=[UnlockEntry(id=u.id, kind=u.kind) for u in tech.unlocks],
            description=tech.description,
        )


class TechTreeFile(BaseModel):
    """Top-level document of a technology tree file.

    ``technologies`` may be a list of entries or a mapping from technology id
    to entry (the id is then taken from the key).
    """

    format_version: int = 1
    technologies: list[TechnologyEntry]

    @model_validator(mode="before")
    @classmethod
    def _accept_mapping(cls, values: Any) -> Any:
        if isinstance(values, dict):
            raw = values.get("technologies")
            if isinstance(raw, dict):
                values = dict(values)
                values["technologies"] = [
                    {"id": tech_id, **entry} for tech_id, entry in raw.items()
                ]
        return values

    def to_tree(self) -> TechTree:
        return TechTree(entry.to_domain() for entry in self.technologies)


def load_tech_tree(path: Path | str) -> TechTree:
    """Read a tree file and return the validated :class:`TechTree`."""

    document = TechTreeFile.model_validate_json(Path(path).read_bytes())
    return document.to_tree()


def export_tech_tree(tree: TechTree, path: Path | str) -> Path:
    """Write ``tree`` to ``path`` in the tree file format."""

    target = Path(path)
    document = TechTreeFile(
        technologies=[TechnologyEntry.from_domain(tech) for tech in tree.technologies]
    )
    target.write_text(document.model_dump_json(indent=2), encoding="utf-8")
    return target
