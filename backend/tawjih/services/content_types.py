"""Content type registry: the three parallel content collections."""

from dataclasses import dataclass
from enum import Enum

from tawjih.models.exam_calendar import ExamCalendar
from tawjih.models.job_competition import JobCompetition
from tawjih.models.school_guidance import SchoolGuidance


class ContentKind(str, Enum):
    JOB = "job"
    GUIDANCE = "guidance"
    EXAM = "exam"


@dataclass(frozen=True, slots=True)
class ContentType:
    kind: ContentKind
    collection: str  # gateway collection name
    model: type
    url_prefix: str
    recency_field: str  # date field used for recency ordering
    recency_dir: str
    label: str


CONTENT_TYPES: dict[ContentKind, ContentType] = {
    ContentKind.JOB: ContentType(
        kind=ContentKind.JOB,
        collection="jobCompetition",
        model=JobCompetition,
        url_prefix="/jobs",
        recency_field="created_at",
        recency_dir="desc",
        label="Job competition",
    ),
    ContentKind.GUIDANCE: ContentType(
        kind=ContentKind.GUIDANCE,
        collection="schoolGuidance",
        model=SchoolGuidance,
        url_prefix="/guidance",
        recency_field="created_at",
        recency_dir="desc",
        label="Guidance article",
    ),
    ContentKind.EXAM: ContentType(
        kind=ContentKind.EXAM,
        collection="examCalendar",
        model=ExamCalendar,
        url_prefix="/exams",
        recency_field="exam_date",
        recency_dir="asc",
        label="Exam calendar",
    ),
}

# Lookup order when only a bare id is known
LOOKUP_ORDER: tuple[ContentKind, ...] = (ContentKind.JOB, ContentKind.GUIDANCE, ContentKind.EXAM)


def parse_kind(value: str | None) -> ContentKind | None:
    """Map a request value to a ContentKind; anything unrecognised (incl. 'all') is None."""
    if not value:
        return None
    try:
        return ContentKind(value.strip().lower())
    except ValueError:
        return None


def kinds_for(value: str | None) -> tuple[ContentKind, ...]:
    """Kinds to scan for a type filter. Unknown values widen to all kinds."""
    kind = parse_kind(value)
    return (kind,) if kind else LOOKUP_ORDER
