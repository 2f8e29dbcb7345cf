"""Pydantic models for the decision registry.

A Question is a decision waiting to be made. It carries descriptive content,
the tags it is filed under, background context and candidate options, and
at most one Decision once it has been resolved.
"""
from typing import FrozenSet, Iterable, Optional, Set
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from decision_registry.errors import AlreadyExists


class Decision(BaseModel):
    """Immutable outcome of a question."""

    model_config = ConfigDict(frozen=True)

    choice: str = Field(..., description="The selected option")
    rationale: str = Field(..., description="Why this option was chosen")
    decision_makers: FrozenSet[str] = Field(
        ..., description="People responsible for the choice"
    )


class Question(BaseModel):
    """
    Model representing a decision to be made.

    Context and options only ever grow. The decision is write-once: it is
    kept out of the public fields and can only be attached through
    set_decision(), which refuses to replace an existing one.
    """

    identifier: UUID = Field(
        default_factory=uuid4,
        frozen=True,
        description="Unique question identifier (UUID), used as the lookup key",
    )
    content: str = Field(..., description="Free-text description of the question")
    tags: Set[str] = Field(
        default_factory=set, description="Registered tags this question is filed under"
    )
    context: Set[str] = Field(
        default_factory=set, description="Background notes for the question"
    )
    options: Set[str] = Field(
        default_factory=set, description="Candidate answers"
    )

    _decision: Optional[Decision] = PrivateAttr(default=None)

    @classmethod
    def create(
        cls,
        content: str,
        tags: Iterable[str] = (),
        context: Iterable[str] = (),
        options: Iterable[str] = (),
    ) -> "Question":
        """Build a new question with a freshly generated identifier."""
        return cls(
            content=content,
            tags=set(tags),
            context=set(context),
            options=set(options),
        )

    @property
    def decision(self) -> Optional[Decision]:
        return self._decision

    def get_tags(self) -> Set[str]:
        return set(self.tags)

    def add_context(self, context_item: str) -> None:
        self.context.add(context_item)

    def get_context(self) -> Set[str]:
        return set(self.context)

    def add_option(self, option: str) -> None:
        self.options.add(option)

    def get_options(self) -> Set[str]:
        return set(self.options)

    def set_decision(self, decision: Decision) -> None:
        """Attach the final decision.

        Raises:
            AlreadyExists: If a decision has already been recorded. The
                existing decision is left untouched.
        """
        if self._decision is not None:
            raise AlreadyExists(
                f"Question {self.identifier} already has a decision"
            )
        self._decision = decision

    def get_decision(self) -> Optional[Decision]:
        return self._decision
