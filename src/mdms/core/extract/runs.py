"""Inline markup to styled runs: a one-pass reducer over markdown-it tokens"""

from dataclasses import dataclass, field
from functools import lru_cache, reduce
from typing import Iterable, Iterator, Optional, Union

from markdown_it import MarkdownIt

from mdms.core.models import Run


STYLE_MAP: dict[str, str] = {
    'em_open':     'italic',
    'strong_open': 'bold',
    's_open':      'strikethrough',
}
TEXT_TYPES = {'text', 'text_special'}
LITERAL_BLOCK_TYPES = {'code_block', 'fence'}     # indented prose parses as a code block


@dataclass(frozen=True)
class Start:
    style: Optional[str] = None     # None for containers that carry no style (paragraph, link, ...)


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class End:
    pass


Event = Union[Start, Text, End]


@dataclass(frozen=True)
class RunState:
    current: Run = field(default_factory=Run)
    runs: tuple[Run, ...] = ()


@lru_cache(maxsize=None)
def make_parser(preset: str = 'commonmark') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset with strikethrough enabled."""
    return MarkdownIt(preset, options_update={"linkify": False}).enable('strikethrough')


def _events(tokens: list) -> Iterator[Event]:
    """Flatten block and inline tokens into Start/Text/End events."""
    for tok in tokens:
        if tok.type == 'inline':
            yield from _events(tok.children or [])
        elif tok.type in TEXT_TYPES:
            yield Text(tok.content)
        elif tok.type in LITERAL_BLOCK_TYPES:
            yield Text(tok.content.rstrip('\n'))
            yield End()
        elif tok.nesting == 1:
            yield Start(STYLE_MAP.get(tok.type))
        elif tok.nesting == -1:
            yield End()


def merge_text(events: Iterable[Event]) -> Iterator[Event]:
    """Coalesce adjacent Text events into one."""
    pending: list[str] = []
    for event in events:
        if isinstance(event, Text):
            pending.append(event.text)
            continue
        if pending:
            yield Text(''.join(pending))
            pending = []
        yield event
    if pending:
        yield Text(''.join(pending))


def step(state: RunState, event: Event) -> RunState:
    """Consume one event: flush on every style start and container end."""
    if isinstance(event, Text):
        current = state.current.model_copy(update={'text': state.current.text + event.text})
        return RunState(current, state.runs)
    if isinstance(event, Start):
        if event.style is None:
            return state
        return RunState(Run(**{event.style: True}), state.runs + (state.current,))
    if isinstance(event, End):
        return RunState(Run(), state.runs + (state.current,))
    return state


def reduce_events(events: Iterable[Event]) -> list[Run]:
    return list(reduce(step, merge_text(events), RunState()).runs)


def tokenize_line(line: str, preset: str = 'commonmark') -> list[Run]:
    """Convert one line of markdown into styled runs; an empty line yields []."""
    if not line:
        return []
    return reduce_events(_events(make_parser(preset).parse(line)))
