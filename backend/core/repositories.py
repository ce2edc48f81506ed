import logging
from typing import Any, Dict, Iterable, List, Protocol, Tuple

from backend.core.errors import CatalogError
from backend.core.models import CourseRequirement
from backend.core.personality import expand_labels
from backend.institutions.loaders import load_courses

logger = logging.getLogger(__name__)


class CourseRepository(Protocol):
    def list_courses(self) -> Tuple[CourseRequirement, ...]:
        ...


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    out: List[str] = []
    for v in values:
        v = (v or "").strip()
        if v and v not in out:
            out.append(v)
    return tuple(out)


def course_from_json(c: Dict[str, Any]) -> CourseRequirement:
    try:
        return CourseRequirement(
            institution=c["institution"].lower().strip(),
            course_name=c["course_name"],
            required_score=int(c["required_score"]),
            required_subjects=_unique(c.get("required_subjects", [])),
            personality_match=expand_labels(_unique(c.get("personality_match", []))),
            duration=c.get("duration", ""),
            intake=c.get("intake", ""),
            description=c.get("description", ""),
            student_life=c.get("student_life", ""),
        )
    except CatalogError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise CatalogError(f"Invalid course entry: {c!r}") from e


class StaticCourseRepository:
    def __init__(self, courses: Iterable[CourseRequirement]):
        self._courses = tuple(courses)

    def list_courses(self) -> Tuple[CourseRequirement, ...]:
        return self._courses


class JsonCourseRepository(StaticCourseRepository):
    """Parses the catalog once; the tuple is shared read-only by every request."""

    def __init__(self, courses_json: Iterable[Dict[str, Any]]):
        super().__init__(course_from_json(c) for c in courses_json)

    @classmethod
    def from_data_dir(cls, root: str) -> "JsonCourseRepository":
        repo = cls(load_courses(root))
        logger.info("Loaded %d catalog courses from %s", len(repo.list_courses()), root)
        return repo
