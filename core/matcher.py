# core/matcher.py

"""
Path matching for compiled patterns.

A match state is the frozenset of segment indices that may consume the next
path component. Advancing a state by one component and closing it over
'**' (which may consume nothing) with an explicit worklist is equivalent to
trying every split point between consumed and remaining components, without
recursion and in O(segments x components).
"""
from pathlib import PurePath
from typing import FrozenSet, Iterable, Sequence, Union

from core.pattern import Literal, Pattern, RecursiveWildcard

MatchState = FrozenSet[int]

def _closure(pattern: Pattern, indices: Iterable[int]) -> MatchState:
    segments = pattern.segments
    reached = set()
    stack = list(indices)
    while stack:
        si = stack.pop()
        if si in reached:
            continue
        reached.add(si)
        # '**' tries the zero-component split first
        if si < len(segments) and isinstance(segments[si], RecursiveWildcard):
            stack.append(si + 1)
    return frozenset(reached)

def start(pattern: Pattern) -> MatchState:
    """State before any component has been consumed."""
    return _closure(pattern, (0,))

def advance(pattern: Pattern, state: MatchState, component: str) -> MatchState:
    """State after consuming one more path component."""
    if not state:
        return state
    segments = pattern.segments
    key = component if pattern.case_sensitive else component.casefold()
    following = []
    for si in state:
        if si >= len(segments):
            continue
        segment = segments[si]
        if isinstance(segment, RecursiveWildcard):
            following.append(si)
        elif isinstance(segment, Literal):
            if segment.key == key:
                following.append(si + 1)
        elif segment.regex.fullmatch(component):
            following.append(si + 1)
    return _closure(pattern, following)

def accepts(pattern: Pattern, state: MatchState) -> bool:
    """True if every segment has been consumed."""
    return len(pattern.segments) in state

def can_continue(pattern: Pattern, state: MatchState) -> bool:
    """True if at least one more component could still be consumed."""
    n = len(pattern.segments)
    return any(si < n for si in state)

def _components(path: Union[str, PurePath, Sequence[str]]) -> Sequence[str]:
    if isinstance(path, str):
        path = PurePath(path)
    if isinstance(path, PurePath):
        return path.parts
    return path

def _consume(pattern: Pattern, path) -> MatchState:
    state = start(pattern)
    for component in _components(path):
        state = advance(pattern, state, component)
        if not state:
            break
    return state

def matches(pattern: Pattern, path) -> bool:
    """Exact match of a path relative to pattern.base."""
    return accepts(pattern, _consume(pattern, path))

def can_descend(pattern: Pattern, partial_path) -> bool:
    """
    True if some file below `partial_path` could still match.

    Conservative: never false for a directory holding a real match.
    """
    return can_continue(pattern, _consume(pattern, partial_path))
