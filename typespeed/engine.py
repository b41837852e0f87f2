"""Keystroke state machine.

Every transition takes an :class:`InputSession` and returns a new one; the
input value is never modified. Once a session is ``finished`` all
transitions return it unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Tuple

from typespeed.timer import DEFAULT_CLOCK


@dataclass(frozen=True)
class KeystrokeRecord:
    char: str
    expected: str
    correct: bool
    extra: bool
    timestamp_ms: float = 0.0


@dataclass(frozen=True)
class WordSlot:
    word: str
    typed: str = ""
    keystrokes: Tuple[KeystrokeRecord, ...] = ()
    completed: bool = False


@dataclass(frozen=True)
class InputSession:
    slots: Tuple[WordSlot, ...]
    current_index: int = 0
    cursor_position: int = 0
    finished: bool = False
    error_chars_ever: int = 0
    # Keypress tallies are history: backspace never lowers them.
    keypress_correct: int = 0
    keypress_incorrect: int = 0

    @property
    def current(self) -> WordSlot:
        return self.slots[self.current_index]

    def _with_slot(self, index: int, slot: WordSlot) -> Tuple[WordSlot, ...]:
        return self.slots[:index] + (slot,) + self.slots[index + 1:]


def create_session(words: Iterable[str]) -> InputSession:
    slots = tuple(WordSlot(word=w) for w in words)
    if not slots:
        raise ValueError("a session needs at least one word")
    return InputSession(slots=slots)


def type_char(session: InputSession, char: str, clock=DEFAULT_CLOCK) -> InputSession:
    if session.finished:
        return session

    idx = session.current_index
    slot = session.current
    pos = len(slot.typed)
    extra = pos >= len(slot.word)
    expected = "" if extra else slot.word[pos]
    record = KeystrokeRecord(
        char=char,
        expected=expected,
        correct=not extra and char == expected,
        extra=extra,
        timestamp_ms=clock.now(),
    )
    slot = replace(slot, typed=slot.typed + char, keystrokes=slot.keystrokes + (record,))

    return replace(
        session,
        slots=session._with_slot(idx, slot),
        cursor_position=len(slot.typed),
        error_chars_ever=session.error_chars_ever + (0 if record.correct else 1),
        keypress_correct=session.keypress_correct + (1 if record.correct else 0),
        keypress_incorrect=session.keypress_incorrect + (0 if record.correct else 1),
    )


def type_space(session: InputSession) -> InputSession:
    if session.finished:
        return session

    idx = session.current_index
    slot = session.current
    if not slot.typed:
        return session

    # The space is judged on the whole word, not per character.
    space_correct = slot.typed == slot.word
    finished = idx + 1 >= len(session.slots)

    return replace(
        session,
        slots=session._with_slot(idx, replace(slot, completed=True)),
        current_index=idx if finished else idx + 1,
        cursor_position=0,
        finished=finished,
        keypress_correct=session.keypress_correct + (1 if space_correct else 0),
        keypress_incorrect=session.keypress_incorrect + (0 if space_correct else 1),
    )


def backspace(session: InputSession) -> InputSession:
    if session.finished:
        return session

    idx = session.current_index
    slot = session.current

    if slot.typed:
        slot = replace(slot, typed=slot.typed[:-1], keystrokes=slot.keystrokes[:-1])
        return replace(
            session,
            slots=session._with_slot(idx, slot),
            cursor_position=len(slot.typed),
        )

    if idx > 0:
        prev = session.slots[idx - 1]
        if prev.completed:
            return replace(
                session,
                slots=session._with_slot(idx - 1, replace(prev, completed=False)),
                current_index=idx - 1,
                cursor_position=len(prev.typed),
            )

    return session


def ctrl_backspace(session: InputSession) -> InputSession:
    if session.finished:
        return session

    idx = session.current_index
    slot = replace(session.current, typed="", keystrokes=())
    return replace(session, slots=session._with_slot(idx, slot), cursor_position=0)


def process_keystroke(
    session: InputSession,
    text: str,
    backspace_key: bool = False,
    ctrl: bool = False,
    clock=DEFAULT_CLOCK,
) -> InputSession:
    """Route one key event to the matching transition.

    Anything that is not a backspace, a space or a single printable
    character is dropped.
    """
    if backspace_key:
        return ctrl_backspace(session) if ctrl else backspace(session)
    if text == " ":
        return type_space(session)
    if len(text) == 1 and text >= " " and text.isprintable():
        return type_char(session, text, clock)
    return session
