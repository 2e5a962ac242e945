"""Technology prerequisite graph.

A :class:`TechTree` is built once from a collection of technologies and
validated on construction: every prerequisite must refer to a known
technology and the prerequisite relation must be acyclic. Queries on a
validated tree therefore always terminate.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Iterator, Mapping

from .enums import Era, UnlockKind
from .errors import CyclicPrerequisiteError, UnknownTechnologyError
from .models import TechID, Technology, UnlockedContent

_VISITING = 1
_DONE = 2

BUILDING_NAME_MARKERS = ("factory", "plant", "building", "walls", "tower", "aqueduct")


def infer_unlock_kind(name: str) -> UnlockKind:
    """Guess whether an unlock id names a building from substrings in the id.

    Only used for tree files whose unlock entries omit an explicit kind.
    """

    if any(marker in name for marker in BUILDING_NAME_MARKERS):
        return UnlockKind.BUILDING
    return UnlockKind.UNIT


def validate_prerequisites(technologies: Mapping[TechID, Technology]) -> None:
    """Ensure prerequisites reference known technologies and form a DAG."""

    for tech in technologies.values():
        for prereq in tech.prerequisites:
            if prereq not in technologies:
                raise UnknownTechnologyError(prereq)

    marks: dict[TechID, int] = {}
    for root in technologies:
        if root in marks:
            continue
        marks[root] = _VISITING
        path: list[TechID] = [root]
        pending: list[Iterator[TechID]] = [iter(technologies[root].prerequisites)]
        while pending:
            child = next(pending[-1], None)
            if child is None:
                marks[path.pop()] = _DONE
                pending.pop()
                continue
            mark = marks.get(child)
            if mark == _VISITING:
                start = path.index(child)
                raise CyclicPrerequisiteError([*path[start:], child])
            if mark is None:
                marks[child] = _VISITING
                path.append(child)
                pending.append(iter(technologies[child].prerequisites))


class TechTree:
    """Validated, immutable prerequisite DAG over technologies."""

    def __init__(self, technologies: Iterable[Technology]) -> None:
        catalog: dict[TechID, Technology] = {}
        for tech in technologies:
            if tech.id in catalog:
                raise ValueError(f"duplicate technology {tech.id!r}")
            if len(set(tech.prerequisites)) != len(tech.prerequisites):
                raise ValueError(f"duplicate prerequisite listed for {tech.id!r}")
            if tech.research_time < 0:
                raise ValueError(f"research_time for {tech.id!r} must be non-negative")
            catalog[tech.id] = tech
        validate_prerequisites(catalog)
        self._catalog = catalog
        self._paths: dict[TechID, tuple[TechID, ...]] = {}

    def __contains__(self, tech_id: object) -> bool:
        return tech_id in self._catalog

    def __iter__(self) -> Iterator[Technology]:
        return iter(self._catalog.values())

    def __len__(self) -> int:
        return len(self._catalog)

    @property
    def technologies(self) -> tuple[Technology, ...]:
        return tuple(self._catalog.values())

    def get(self, tech_id: str) -> Technology:
        """Return a technology or raise :class:`UnknownTechnologyError`."""

        try:
            return self._catalog[TechID(tech_id)]
        except KeyError:
            raise UnknownTechnologyError(tech_id) from None

    def available_technologies(self, researched: Collection[str]) -> list[Technology]:
        """Technologies not yet researched whose prerequisites are all researched."""

        known = set(researched)
        return [
            tech
            for tech in self._catalog.values()
            if tech.id not in known and all(prereq in known for prereq in tech.prerequisites)
        ]

    def technology_path(self, target: str) -> list[TechID]:
        """Return the shortest single prerequisite chain ending at ``target``.

        At every step only the prerequisite with the shortest chain is
        followed (the first one declared wins ties). Technologies with more
        than one prerequisite therefore appear with just one of their
        branches; use :meth:`research_plan` for an order that satisfies all
        of them.
        """

        return list(self._shortest_chain(self.get(target)))

    def _shortest_chain(self, tech: Technology) -> tuple[TechID, ...]:
        cached = self._paths.get(tech.id)
        if cached is not None:
            return cached
        shortest: tuple[TechID, ...] = ()
        for prereq in tech.prerequisites:
            chain = self._shortest_chain(self._catalog[prereq])
            if not shortest or len(chain) < len(shortest):
                shortest = chain
        result = (*shortest, tech.id)
        self._paths[tech.id] = result
        return result

    def research_plan(self, target: str, researched: Collection[str] = ()) -> list[TechID]:
        """Return every missing technology needed for ``target`` in a valid order."""

        root = self.get(target)
        known = set(researched)
        plan: list[TechID] = []
        seen: set[TechID] = set()

        def visit(tech: Technology) -> None:
            if tech.id in seen or tech.id in known:
                return
            seen.add(tech.id)
            for prereq in tech.prerequisites:
                visit(self._catalog[prereq])
            plan.append(tech.id)

        visit(root)
        return plan

    def combined_effects(self, researched: Iterable[str]) -> dict[str, float]:
        """Sum the effect maps of every researched technology."""

        effects: dict[str, float] = {}
        for tech_id in researched:
            for effect, value in self.get(tech_id).effects.items():
                effects[effect] = effects.get(effect, 0.0) + value
        return effects

    def unlocked_content(self, researched: Iterable[str]) -> UnlockedContent:
        """Split the unlocks of researched technologies into units and buildings."""

        content = UnlockedContent()
        for tech_id in researched:
            for unlock in self.get(tech_id).unlocks:
                if unlock.kind == UnlockKind.BUILDING:
                    content.buildings.append(unlock.id)
                else:
                    content.units.append(unlock.id)
        return content

    def derive_era(self, researched: Iterable[str], *, initial: Era = Era.ANCIENT) -> Era:
        """Highest era among researched technologies, ``initial`` when none."""

        highest: Era | None = None
        for tech_id in researched:
            era = self.get(tech_id).era
            if highest is None or era.index > highest.index:
                highest = era
        return highest if highest is not None else initial
