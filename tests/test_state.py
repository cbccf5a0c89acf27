import datetime

import pytest

from intsoc.errors import IntsocError
from intsoc.state import IetfState, InvalidTransitionError, StateMachine


def test_initial_state_is_draft():
    assert IetfState.initial() is IetfState.DRAFT
    machine = StateMachine()
    assert machine.current is IetfState.DRAFT
    assert machine.history == ()


def test_display_labels():
    assert str(IetfState.initial()) == "Draft"
    assert [str(s) for s in IetfState.AUTH48.valid_transitions()] == [
        "Published",
        "RFC Editor Queue",
    ]
    assert [str(s) for s in IetfState.WG_LAST_CALL.valid_transitions()] == [
        "Waiting for Writeup",
        "WG Document",
        "Expired",
        "Dead",
    ]
    assert [str(s) for s in IetfState.RFC_EDITOR_QUEUE.valid_transitions()] == [
        "AUTH48",
        "Approved",
    ]


def test_terminal_states_have_no_transitions():
    for state in (
        IetfState.PUBLISHED,
        IetfState.EXPIRED,
        IetfState.WITHDRAWN,
        IetfState.DEAD,
        IetfState.REPLACED,
    ):
        assert state.is_terminal() is True
        assert state.valid_transitions() == []


def test_non_terminal_states_have_transitions():
    assert IetfState.DRAFT.is_terminal() is False
    assert len(IetfState.DRAFT.valid_transitions()) == 3
    assert IetfState.APPROVED.is_terminal() is False
    assert IetfState.APPROVED.valid_transitions() == [IetfState.RFC_EDITOR_QUEUE]


def test_draft_transitions():
    assert IetfState.DRAFT.valid_transitions() == [
        IetfState.IDNITS_CHECK,
        IetfState.EXPIRED,
        IetfState.WITHDRAWN,
    ]


def test_valid_transition_is_recorded():
    machine = StateMachine()
    machine.transition(IetfState.IDNITS_CHECK, "nits clean")
    assert machine.current is IetfState.IDNITS_CHECK
    assert len(machine.history) == 1
    record = machine.history[0]
    assert record.from_state is IetfState.DRAFT
    assert record.to_state is IetfState.IDNITS_CHECK
    assert record.reason == "nits clean"
    assert record.timestamp.tzinfo == datetime.timezone.utc


def test_invalid_transition_raises_and_keeps_state():
    machine = StateMachine()
    with pytest.raises(InvalidTransitionError) as info:
        machine.transition(IetfState.PUBLISHED)
    assert info.value.from_state is IetfState.DRAFT
    assert info.value.to_state is IetfState.PUBLISHED
    assert info.value.valid == IetfState.DRAFT.valid_transitions()
    assert machine.current is IetfState.DRAFT
    assert machine.history == ()
    assert isinstance(info.value, IntsocError)


def test_error_message():
    machine = StateMachine()
    with pytest.raises(InvalidTransitionError) as info:
        machine.transition(IetfState.PUBLISHED)
    assert str(info.value) == (
        "invalid transition from Draft to Published (valid: [IdnitsCheck, Expired, Withdrawn])"
    )


def test_full_path_to_publication():
    path = [
        IetfState.IDNITS_CHECK,
        IetfState.WG_ADOPTED,
        IetfState.WG_DOCUMENT,
        IetfState.WG_LAST_CALL,
        IetfState.WAITING_FOR_WRITEUP,
        IetfState.AD_EVALUATION,
        IetfState.IESG_EVALUATION,
        IetfState.IESG_LAST_CALL,
        IetfState.APPROVED,
        IetfState.RFC_EDITOR_QUEUE,
        IetfState.AUTH48,
        IetfState.PUBLISHED,
    ]
    machine = StateMachine()
    for state in path:
        assert not machine.is_complete()
        assert state in machine.available_transitions()
        machine.transition(state)
    assert machine.is_complete()
    assert [t.to_state for t in machine.history] == path
    assert machine.available_transitions() == []


def test_history_chains():
    machine = StateMachine()
    machine.transition(IetfState.IDNITS_CHECK)
    machine.transition(IetfState.DRAFT)
    machine.transition(IetfState.EXPIRED)
    history = machine.history
    for earlier, later in zip(history, history[1:]):
        assert earlier.to_state is later.from_state
        assert earlier.timestamp <= later.timestamp
    assert machine.is_complete()
    with pytest.raises(InvalidTransitionError):
        machine.transition(IetfState.DRAFT)