"""event-ops-engine: resource availability and crew rest compliance."""

from event_ops.availability import (
    assess_addition,
    availability_or_zero,
    check_availability,
    collect_commitments,
    commitments_from_job,
    commitments_from_rental,
    resolve_availability,
)
from event_ops.calendar import DateInterval, iso_week, overlaps, parse_day
from event_ops.compliance import (
    FIVE_PLUS_TWO,
    RestPolicy,
    analyze_crew_member,
    analyze_rest_compliance,
)
from event_ops.records import (
    Absence,
    Commitment,
    CrewMember,
    Job,
    ManualTask,
    MaterialLine,
    Rental,
    Resource,
)
from event_ops.repository import InMemoryRepository, Repository
from event_ops.types import (
    AbsenceKind,
    ActivitySource,
    AdditionCheck,
    ApprovalStatus,
    AvailabilityResult,
    CommitmentSource,
    Conflict,
    CrewType,
    EngineError,
    InvalidInterval,
    JobStatus,
    RentalStatus,
    ResourceCategory,
    ResourceNotFound,
    RestAnalysis,
    WorkActivity,
)

__all__ = [
    "Absence",
    "AbsenceKind",
    "ActivitySource",
    "AdditionCheck",
    "ApprovalStatus",
    "AvailabilityResult",
    "Commitment",
    "CommitmentSource",
    "Conflict",
    "CrewMember",
    "CrewType",
    "DateInterval",
    "EngineError",
    "FIVE_PLUS_TWO",
    "InMemoryRepository",
    "InvalidInterval",
    "Job",
    "JobStatus",
    "ManualTask",
    "MaterialLine",
    "Rental",
    "RentalStatus",
    "Repository",
    "Resource",
    "ResourceCategory",
    "ResourceNotFound",
    "RestAnalysis",
    "RestPolicy",
    "WorkActivity",
    "analyze_crew_member",
    "analyze_rest_compliance",
    "assess_addition",
    "availability_or_zero",
    "check_availability",
    "collect_commitments",
    "commitments_from_job",
    "commitments_from_rental",
    "iso_week",
    "overlaps",
    "parse_day",
    "resolve_availability",
]
