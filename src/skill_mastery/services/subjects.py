"""Subject classification for skill_mastery.

Decides which skills get spaced repetition. The skill-to-subject
table is injected; skill IDs are never parsed to guess a subject.
"""

from collections.abc import Iterable, Mapping

__all__ = [
    "DEFAULT_SPACED_REPETITION_SUBJECTS",
    "SubjectClassifier",
]

# Vocabulary and flashcard subjects
DEFAULT_SPACED_REPETITION_SUBJECTS: frozenset[str] = frozenset({"engelska", "biologi"})


class SubjectClassifier:
    """Static skill -> subject table plus spaced repetition eligibility.

    Example:
        classifier = SubjectClassifier(skill_subjects={"en-vocab-1": "engelska"})
        classifier.should_use_spaced_repetition("en-vocab-1")  # True
    """

    def __init__(
        self,
        spaced_repetition_subjects: Iterable[str] = DEFAULT_SPACED_REPETITION_SUBJECTS,
        skill_subjects: Mapping[str, str] | None = None,
    ) -> None:
        self._eligible = frozenset(spaced_repetition_subjects)
        self._skill_subjects: dict[str, str] = dict(skill_subjects or {})

    def register(self, skill_id: str, subject_id: str) -> None:
        """Add or replace the subject of a skill."""
        self._skill_subjects[skill_id] = subject_id

    def subject_for_skill(self, skill_id: str) -> str | None:
        return self._skill_subjects.get(skill_id)

    def is_spaced_repetition_subject(self, subject_id: str | None) -> bool:
        return subject_id is not None and subject_id in self._eligible

    def should_use_spaced_repetition(
        self,
        skill_id: str,
        subject_id: str | None = None,
    ) -> bool:
        """Check whether a skill gets a review item.

        Args:
            skill_id: Skill to check
            subject_id: Subject of the skill; looked up in the table if omitted

        Returns:
            True only for skills of spaced-repetition subjects
        """
        if subject_id is None:
            subject_id = self.subject_for_skill(skill_id)
        return self.is_spaced_repetition_subject(subject_id)
