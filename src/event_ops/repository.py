"""Record access seen by the engine: whole-record snapshots, keyed by id.

The engine keeps no reference to a repository between calls. Any store that
can list these records satisfies the protocol; InMemoryRepository backs
development, the fixture snapshot and the tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from event_ops.records import CrewMember, Job, Rental, Resource
from event_ops.types import ResourceNotFound


class Repository(Protocol):
    def list_jobs(self) -> Sequence[Job]: ...

    def list_rentals(self) -> Sequence[Rental]: ...

    def list_inventory(self) -> Sequence[Resource]: ...

    def list_crew(self) -> Sequence[CrewMember]: ...

    def get_resource(self, resource_id: str) -> Resource: ...

    def get_crew_member(self, crew_member_id: str) -> CrewMember: ...


@dataclass(frozen=True)
class InMemoryRepository:
    """Immutable snapshot of the record store.

    To reflect an edit, build a new repository (``dataclasses.replace``)
    and query again.
    """

    jobs: tuple[Job, ...] = ()
    rentals: tuple[Rental, ...] = ()
    inventory: tuple[Resource, ...] = ()
    crew: tuple[CrewMember, ...] = ()

    def list_jobs(self) -> Sequence[Job]:
        return self.jobs

    def list_rentals(self) -> Sequence[Rental]:
        return self.rentals

    def list_inventory(self) -> Sequence[Resource]:
        return self.inventory

    def list_crew(self) -> Sequence[CrewMember]:
        return self.crew

    def get_resource(self, resource_id: str) -> Resource:
        """Raises ResourceNotFound."""
        for resource in self.inventory:
            if resource.id == resource_id:
                return resource
        raise ResourceNotFound(resource_id)

    def get_crew_member(self, crew_member_id: str) -> CrewMember:
        """Raises KeyError if no crew member has that id."""
        for member in self.crew:
            if member.id == crew_member_id:
                return member
        raise KeyError(crew_member_id)
