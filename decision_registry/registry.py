"""In-memory registry of tags and questions.

The Registry is the only place where cross-entity rules are enforced: a
question is admitted only when every tag it uses has been registered, and
identifiers are unique across the collection. Lookups hand out deep copies;
mutations are applied to the stored instance so they are visible to every
later read.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set
from uuid import UUID

from decision_registry.errors import (AlreadyExists, DoesNotExist,
                                      InvalidUUID, UsesNonExistentTags)
from models.config import RegistryConfig
from models.schema import Decision, Question

logger = logging.getLogger(__name__)


class Registry:
    """Root store for tags and questions.

    Tags and questions accumulate for the life of the object; nothing is
    ever removed. Not thread-safe: callers sharing a registry across threads
    must guard the whole object with a single lock.
    """

    def __init__(
        self, tags: Optional[Iterable[str]] = None, strict_mutations: bool = False
    ):
        """Create a registry.

        Args:
            tags: Tags to register up front. Duplicates raise AlreadyExists.
            strict_mutations: When True, add_question_context,
                add_question_option and set_question_decision raise
                InvalidUUID/DoesNotExist for unresolved identifiers instead
                of silently doing nothing.
        """
        self._tags: Set[str] = set()
        self._questions: Dict[UUID, Question] = {}
        self.strict_mutations = strict_mutations

        for tag in tags or ():
            self.add_tag(tag)

    @classmethod
    def from_config(cls, config: RegistryConfig) -> "Registry":
        """Build a registry seeded from configuration."""
        return cls(tags=config.seed_tags, strict_mutations=config.strict_mutations)

    def __len__(self) -> int:
        return len(self._questions)

    def __contains__(self, identifier: object) -> bool:
        if not isinstance(identifier, str):
            return False
        try:
            self._resolve(identifier)
        except (InvalidUUID, DoesNotExist):
            return False
        return True

    # Tags

    def add_tag(self, tag: str) -> bool:
        """Register a tag.

        Tags are compared exactly; no case or whitespace normalization.

        Returns:
            True once the tag is registered.

        Raises:
            AlreadyExists: If the tag is already registered.
        """
        if tag in self._tags:
            raise AlreadyExists(f"Tag already exists: {tag}")
        self._tags.add(tag)
        logger.info(f"Registered tag: {tag}")
        return True

    def get_tags(self) -> Set[str]:
        return set(self._tags)

    # Questions

    def add_question(self, question: Question) -> str:
        """Admit a question into the registry.

        The registry keeps its own copy, so later changes to the caller's
        object are not reflected here.

        Returns:
            The question identifier as a string.

        Raises:
            UsesNonExistentTags: If any tag on the question is not registered.
                Carries every unknown tag.
            AlreadyExists: If a question with the same identifier is present.
        """
        unknown_tags = question.tags - self._tags
        if unknown_tags:
            logger.warning(
                f"Rejected question {question.identifier}: unknown tags {sorted(unknown_tags)}"
            )
            raise UsesNonExistentTags(unknown_tags)

        if question.identifier in self._questions:
            logger.warning(f"Rejected duplicate question {question.identifier}")
            raise AlreadyExists(f"Question already exists: {question.identifier}")

        self._questions[question.identifier] = question.model_copy(deep=True)
        logger.info(f"Admitted question {question.identifier}")
        return str(question.identifier)

    def get_question(self, identifier: str) -> Question:
        """Return an independent copy of a question.

        Raises:
            InvalidUUID: If identifier is not a well-formed UUID string.
            DoesNotExist: If no admitted question has this identifier.
        """
        return self._resolve(identifier).model_copy(deep=True)

    def list_questions(self, tag: Optional[str] = None) -> List[Question]:
        """Return copies of all admitted questions, optionally only those carrying tag."""
        return [
            question.model_copy(deep=True)
            for question in self._questions.values()
            if tag is None or tag in question.tags
        ]

    def add_question_context(self, identifier: str, new_contexts: Iterable[str]) -> None:
        question = self._resolve_for_mutation(identifier)
        if question is None:
            return
        for context_item in new_contexts:
            question.add_context(context_item)

    def add_question_option(self, identifier: str, new_options: Iterable[str]) -> None:
        question = self._resolve_for_mutation(identifier)
        if question is None:
            return
        for option in new_options:
            question.add_option(option)

    def set_question_decision(self, identifier: str, decision: Decision) -> None:
        """Attach a decision to an admitted question.

        Raises:
            AlreadyExists: If the question already has a decision. The first
                decision is kept.
        """
        question = self._resolve_for_mutation(identifier)
        if question is None:
            return
        try:
            question.set_decision(decision)
        except AlreadyExists:
            logger.warning(f"Rejected second decision for question {identifier}")
            raise
        logger.info(f"Recorded decision for question {identifier}: {decision.choice}")

    def _resolve(self, identifier: str) -> Question:
        """Return the stored question for identifier (not a copy)."""
        try:
            key = UUID(identifier)
        except (ValueError, TypeError, AttributeError) as e:
            raise InvalidUUID(f"Invalid question identifier: {identifier!r}") from e

        question = self._questions.get(key)
        if question is None:
            raise DoesNotExist(f"Question does not exist: {identifier}")
        return question

    def _resolve_for_mutation(self, identifier: str) -> Optional[Question]:
        # Unresolved identifiers are a no-op unless strict_mutations is set
        try:
            return self._resolve(identifier)
        except (InvalidUUID, DoesNotExist) as e:
            if self.strict_mutations:
                raise
            logger.debug(f"Ignoring mutation for unresolved question: {e}")
            return None
