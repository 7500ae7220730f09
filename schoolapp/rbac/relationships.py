"""
Teaching-relationship lookups used by the policy engine

The engine never decides on its own whether a teacher teaches a class or a
student. It asks an injected TeachingRelationships implementation.
"""
from typing import Iterable, Mapping, Optional, Protocol, runtime_checkable

from schoolapp.rbac.models import Subject


@runtime_checkable
class TeachingRelationships(Protocol):
    """Resolves which classes and students a teacher teaches"""

    def teaches_student(self, subject: Subject, student_id: str) -> bool:
        ...

    def teaches_class(self, subject: Subject, class_id: str) -> bool:
        ...


class NoTeachingRelationships:
    """Knows of no teaching relationships; every lookup fails"""

    def teaches_student(self, subject: Subject, student_id: str) -> bool:
        return False

    def teaches_class(self, subject: Subject, class_id: str) -> bool:
        return False


class StaticTeachingRelationships:
    """
    Teaching relationships from fixed maps.

    Args:
        classes: teacher id -> class ids the teacher teaches
        students: teacher id -> student ids the teacher teaches directly
        class_students: class id -> student ids enrolled in the class. A
            teacher teaches every student enrolled in a class they teach.
    """

    def __init__(self,
                 classes: Optional[Mapping[str, Iterable[str]]] = None,
                 students: Optional[Mapping[str, Iterable[str]]] = None,
                 class_students: Optional[Mapping[str, Iterable[str]]] = None):
        self._classes = {t: frozenset(c) for t, c in (classes or {}).items()}
        self._students = {t: frozenset(s) for t, s in (students or {}).items()}
        self._class_students = {c: frozenset(s) for c, s in (class_students or {}).items()}

    def teaches_class(self, subject: Subject, class_id: str) -> bool:
        return class_id in self._classes.get(subject.id, frozenset())

    def teaches_student(self, subject: Subject, student_id: str) -> bool:
        if student_id in self._students.get(subject.id, frozenset()):
            return True
        return any(
            student_id in self._class_students.get(class_id, frozenset())
            for class_id in self._classes.get(subject.id, frozenset())
        )
