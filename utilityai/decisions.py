"""Decisions: actions weighted by a product of consideration scores."""

from __future__ import annotations

import enum
import random
import string
import uuid
from dataclasses import dataclass, field

from .considerations import Consideration, ConsiderationType
from .utils import trim_type_name, type_name_of

_TAG_ALPHABET = string.ascii_letters + string.digits


class FilterKind(enum.Enum):
    INCLUSIVE = "inclusive"
    EXCLUSIVE = "exclusive"


@dataclass(frozen=True)
class Filter:
    """Requires an entity to have (inclusive) or lack (exclusive) a component."""

    kind: FilterKind
    component_type: type

    @classmethod
    def inclusive(cls, component_type: type) -> "Filter":
        return cls(FilterKind.INCLUSIVE, component_type)

    @classmethod
    def exclusive(cls, component_type: type) -> "Filter":
        return cls(FilterKind.EXCLUSIVE, component_type)


def _random_tag() -> str:
    return "".join(random.choices(_TAG_ALPHABET, k=5)).lower()


@dataclass
class Decision:
    """An action component, the considerations that score it and its filters."""

    name: str
    action_name: str
    action: type
    is_targeted: bool
    considerations: list = field(default_factory=list)
    base_score: float = 1.0
    subject_filters: list = field(default_factory=list)
    target_filters: list = field(default_factory=list)
    inertia: float | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def _construct(cls, action: type, is_targeted: bool) -> "Decision":
        action_name = trim_type_name(type_name_of(action))
        return cls(
            name=f"{action_name}_{_random_tag()}",
            action_name=action_name,
            action=action,
            is_targeted=is_targeted,
        )

    @classmethod
    def simple(cls, action: type) -> "Decision":
        return cls._construct(action, False)

    @classmethod
    def targeted(cls, action: type) -> "Decision":
        return cls._construct(action, True)

    def add_consideration(self, consideration: Consideration) -> "Decision":
        if (
            not self.is_targeted
            and consideration.consideration_type is ConsiderationType.TARGETED
        ):
            raise ValueError(
                f"Cannot add targeted consideration '{consideration.name}' "
                f"to simple decision '{self.name}'!"
            )
        self.considerations.append(consideration)
        return self

    def subject_filter_include(self, component_type: type) -> "Decision":
        self.subject_filters.append(Filter.inclusive(component_type))
        return self

    def subject_filter_exclude(self, component_type: type) -> "Decision":
        self.subject_filters.append(Filter.exclusive(component_type))
        return self

    def _require_targeted(self) -> None:
        if not self.is_targeted:
            raise ValueError("Only targeted Decisions may have target filters")

    def target_filter_include(self, component_type: type) -> "Decision":
        self._require_targeted()
        self.target_filters.append(Filter.inclusive(component_type))
        return self

    def target_filter_exclude(self, component_type: type) -> "Decision":
        self._require_targeted()
        self.target_filters.append(Filter.exclusive(component_type))
        return self

    def set_base_score(self, score: float) -> "Decision":
        """Set the starting score that considerations multiply; default 1.0."""
        if score <= 0.0 or score >= 10.0:
            raise ValueError("base_score must be between 0.0 and 10.0")
        self.base_score = score
        return self

    def set_inertia(self, inertia: float) -> "Decision":
        """Set the bonus added to this decision's score while it is active."""
        if not 0.0 <= inertia < 1.0:
            raise ValueError("inertia must be between 0.0 and 1.0")
        self.inertia = inertia
        return self

    def with_name(self, name: str) -> "Decision":
        self.name = str(name)
        return self