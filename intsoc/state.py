"""Document lifecycle state machines."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Sequence, TypeVar

from .errors import IntsocError


class IetfState(Enum):
    """IETF document states; the value is the serialised identifier."""

    DRAFT = "Draft"
    IDNITS_CHECK = "IdnitsCheck"
    INDIVIDUAL_SUBMITTED = "IndividualSubmitted"
    WG_ADOPTED = "WgAdopted"
    WG_DOCUMENT = "WgDocument"
    WG_LAST_CALL = "WgLastCall"
    WAITING_FOR_WRITEUP = "WaitingForWriteup"
    AD_EVALUATION = "AdEvaluation"
    IESG_EVALUATION = "IesgEvaluation"
    IESG_LAST_CALL = "IesgLastCall"
    APPROVED = "Approved"
    RFC_EDITOR_QUEUE = "RfcEditorQueue"
    AUTH48 = "Auth48"
    PUBLISHED = "Published"
    EXPIRED = "Expired"
    WITHDRAWN = "Withdrawn"
    DEAD = "Dead"
    REPLACED = "Replaced"

    def __str__(self) -> str:
        return _IETF_LABELS[self]

    def valid_transitions(self) -> list[IetfState]:
        """The states this state may move to, in their defined order."""
        return list(_IETF_TRANSITIONS[self])

    def is_terminal(self) -> bool:
        """Whether this is a final state."""
        return self in _IETF_TERMINAL

    @classmethod
    def initial(cls) -> IetfState:
        """The state every document starts in."""
        return cls.DRAFT


_S = IetfState

_IETF_LABELS = {
    _S.DRAFT: "Draft",
    _S.IDNITS_CHECK: "Idnits Check",
    _S.INDIVIDUAL_SUBMITTED: "Individual Submitted",
    _S.WG_ADOPTED: "WG Adopted",
    _S.WG_DOCUMENT: "WG Document",
    _S.WG_LAST_CALL: "WG Last Call",
    _S.WAITING_FOR_WRITEUP: "Waiting for Writeup",
    _S.AD_EVALUATION: "AD Evaluation",
    _S.IESG_EVALUATION: "IESG Evaluation",
    _S.IESG_LAST_CALL: "IESG Last Call",
    _S.APPROVED: "Approved",
    _S.RFC_EDITOR_QUEUE: "RFC Editor Queue",
    _S.AUTH48: "AUTH48",
    _S.PUBLISHED: "Published",
    _S.EXPIRED: "Expired",
    _S.WITHDRAWN: "Withdrawn",
    _S.DEAD: "Dead",
    _S.REPLACED: "Replaced",
}

_IETF_TERMINAL = frozenset({_S.PUBLISHED, _S.EXPIRED, _S.WITHDRAWN, _S.DEAD, _S.REPLACED})

_IETF_TRANSITIONS: dict[IetfState, tuple[IetfState, ...]] = {
    _S.DRAFT: (_S.IDNITS_CHECK, _S.EXPIRED, _S.WITHDRAWN),
    _S.IDNITS_CHECK: (_S.INDIVIDUAL_SUBMITTED, _S.WG_ADOPTED, _S.DRAFT, _S.EXPIRED),
    _S.INDIVIDUAL_SUBMITTED: (_S.AD_EVALUATION, _S.EXPIRED, _S.WITHDRAWN, _S.DEAD),
    _S.WG_ADOPTED: (_S.WG_DOCUMENT, _S.EXPIRED, _S.DEAD),
    _S.WG_DOCUMENT: (_S.WG_LAST_CALL, _S.EXPIRED, _S.DEAD, _S.REPLACED),
    _S.WG_LAST_CALL: (_S.WAITING_FOR_WRITEUP, _S.WG_DOCUMENT, _S.EXPIRED, _S.DEAD),
    _S.WAITING_FOR_WRITEUP: (_S.AD_EVALUATION, _S.EXPIRED),
    _S.AD_EVALUATION: (_S.IESG_EVALUATION, _S.WG_DOCUMENT, _S.DEAD),
    _S.IESG_EVALUATION: (_S.IESG_LAST_CALL, _S.APPROVED, _S.WG_DOCUMENT, _S.DEAD),
    _S.IESG_LAST_CALL: (_S.APPROVED, _S.IESG_EVALUATION, _S.DEAD),
    _S.APPROVED: (_S.RFC_EDITOR_QUEUE,),
    _S.RFC_EDITOR_QUEUE: (_S.AUTH48, _S.APPROVED),
    _S.AUTH48: (_S.PUBLISHED, _S.RFC_EDITOR_QUEUE),
    _S.PUBLISHED: (),
    _S.EXPIRED: (),
    _S.WITHDRAWN: (),
    _S.DEAD: (),
    _S.REPLACED: (),
}

S = TypeVar("S")


@dataclass(frozen=True)
class Transition(Generic[S]):
    """One recorded move between states."""

    from_state: S
    to_state: S
    timestamp: datetime.datetime
    reason: str | None = None


def _identifier(state: object) -> str:
    return state.value if isinstance(state, Enum) else str(state)


class InvalidTransitionError(IntsocError):
    """A transition that the current state does not allow."""

    def __init__(self, from_state: object, to_state: object, valid: Sequence[object]) -> None:
        self.from_state = from_state
        self.to_state = to_state
        self.valid = list(valid)
        names = ", ".join(_identifier(state) for state in self.valid)
        super().__init__(
            f"invalid transition from {from_state} to {to_state} (valid: [{names}])"
        )


class StateMachine(Generic[S]):
    """Tracks a current state and the history of transitions that led to it."""

    def __init__(self, state_type: type = IetfState) -> None:
        self._current: S = state_type.initial()
        self._history: list[Transition[S]] = []

    @property
    def current(self) -> S:
        """The current state."""
        return self._current

    @property
    def history(self) -> tuple[Transition[S], ...]:
        """Every transition made so far, oldest first."""
        return tuple(self._history)

    def transition(self, to: S, reason: str | None = None) -> None:
        """Move to ``to``; raise InvalidTransitionError if it is not allowed."""
        valid = self._current.valid_transitions()
        if to not in valid:
            raise InvalidTransitionError(self._current, to, valid)
        self._history.append(
            Transition(
                from_state=self._current,
                to_state=to,
                timestamp=datetime.datetime.now(datetime.timezone.utc),
                reason=reason,
            )
        )
        self._current = to

    def is_complete(self) -> bool:
        """Whether the current state is terminal."""
        return self._current.is_terminal()

    def available_transitions(self) -> list[S]:
        """The states reachable in one step."""
        return self._current.valid_transitions()