# core/pattern.py

"""Glob pattern compilation."""
import os
import re
from pathlib import Path
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

from core.exceptions import PatternSyntaxError
from utils.platform_utils import path_separators

class Literal(NamedTuple):
    """A path component matched by its exact name."""
    name: str
    key: str  # name as compared; case-folded when the run ignores case

class Wildcard(NamedTuple):
    """One path component matched by a sub-glob such as '*.txt' or 'img_[0-9]?'."""
    glob: str
    regex: 're.Pattern'

class RecursiveWildcard(NamedTuple):
    """The '**' component: zero or more whole path components."""
    glob: str = '**'

Segment = Union[Literal, Wildcard, RecursiveWildcard]

class Pattern(NamedTuple):
    """A compiled glob pattern, relative to `base`. Immutable once built."""
    raw: str
    index: int
    base: Path
    segments: Tuple[Segment, ...]
    case_sensitive: bool

    @property
    def static_prefix(self) -> Tuple[str, ...]:
        """Literal components before the first wildcard, excluding the file name."""
        prefix = []
        for segment in self.segments[:-1]:
            if not isinstance(segment, Literal):
                break
            prefix.append(segment.name)
        return tuple(prefix)

    @property
    def root(self) -> Path:
        """Directory the walk for this pattern starts from."""
        return self.base.joinpath(*self.static_prefix)

    def anchored(self) -> 'Pattern':
        """
        Returns the same pattern based at the filesystem anchor ('/' or a drive),
        with the base directory turned into leading literal segments.
        """
        parts = list(self.base.parts[1:])
        rest = list(self.segments)
        while rest and isinstance(rest[0], Literal) and rest[0].name == '..':
            if parts:
                parts.pop()
            rest.pop(0)
        leading = tuple(_literal(part, self.case_sensitive) for part in parts)
        return self._replace(base=Path(self.base.anchor), segments=leading + tuple(rest))

    def describe(self) -> str:
        kinds = []
        for segment in self.segments:
            if isinstance(segment, Literal):
                kinds.append(f"literal({segment.name})")
            elif isinstance(segment, Wildcard):
                kinds.append(f"wildcard({segment.glob})")
            else:
                kinds.append("recursive(**)")
        return " / ".join(kinds)

def _literal(name: str, case_sensitive: bool) -> Literal:
    return Literal(name, name if case_sensitive else name.casefold())

def _parse_class(raw: str, component: str, i: int, offset: int) -> Tuple[int, str]:
    """Parses a '[...]' class starting at component[i]; returns (index of ']', regex)."""
    n = len(component)
    j = i + 1
    negate = False
    if j < n and component[j] in '!^':
        negate = True
        j += 1
    items = []
    first = True
    while True:
        if j >= n:
            raise PatternSyntaxError(raw, offset + i, "unclosed character class")
        c = component[j]
        # ']' right after the opening bracket is a literal member
        if c == ']' and not first:
            break
        first = False
        if j + 2 < n and component[j + 1] == '-' and component[j + 2] != ']':
            lo, hi = c, component[j + 2]
            if lo > hi:
                raise PatternSyntaxError(raw, offset + j, f"invalid character range '{lo}-{hi}'")
            items.append(f"{re.escape(lo)}-{re.escape(hi)}")
            j += 3
        else:
            items.append(re.escape(c))
            j += 1
    return j, f"[{'^' if negate else ''}{''.join(items)}]"

def _compile_component(raw: str, component: str, offset: int, case_sensitive: bool) -> Segment:
    if component == '**':
        return RecursiveWildcard()

    regex_parts = []
    has_wildcard = False
    i = 0
    while i < len(component):
        c = component[i]
        if c == '*':
            if i + 1 < len(component) and component[i + 1] == '*':
                raise PatternSyntaxError(raw, offset + i, "'**' must be a whole path component")
            regex_parts.append('.*')
            has_wildcard = True
        elif c == '?':
            regex_parts.append('.')
            has_wildcard = True
        elif c == '[':
            i, char_class = _parse_class(raw, component, i, offset)
            regex_parts.append(char_class)
            has_wildcard = True
        else:
            regex_parts.append(re.escape(c))
        i += 1

    if not has_wildcard:
        return _literal(component, case_sensitive)
    flags = re.DOTALL if case_sensitive else re.DOTALL | re.IGNORECASE
    return Wildcard(component, re.compile(''.join(regex_parts), flags))

def compile_pattern(raw: str, index: int = 0, case_sensitive: bool = True,
                    cwd: Optional[Path] = None) -> Pattern:
    """
    Compiles a glob string into a Pattern.

    Relative patterns are based at `cwd` (default: the working directory),
    absolute ones at their filesystem anchor. Raises PatternSyntaxError with
    the position of the offending construct.
    """
    if raw is None or not raw.strip():
        raise PatternSyntaxError(raw or '', 0, "empty pattern")

    text = raw
    for sep in path_separators():
        if sep != '/':
            text = text.replace(sep, '/')

    if os.path.isabs(text):
        anchor = Path(text).anchor
        base = Path(anchor)
        offset = len(anchor)
    else:
        base = Path(cwd).absolute() if cwd is not None else Path.cwd()
        offset = 0

    segments: List[Segment] = []
    pos = offset
    for component in text[offset:].split('/'):
        start = pos
        pos += len(component) + 1
        if component in ('', '.'):
            continue
        segment = _compile_component(raw, component, start, case_sensitive)
        if isinstance(segment, RecursiveWildcard) and segments and isinstance(segments[-1], RecursiveWildcard):
            continue
        if isinstance(segment, Literal) and segment.name == '..':
            if any(not isinstance(s, Literal) for s in segments):
                raise PatternSyntaxError(raw, start, "'..' after a wildcard is not supported")
            if segments and segments[-1].name != '..':
                segments.pop()
                continue
        segments.append(segment)

    if all(isinstance(s, Literal) and s.name == '..' for s in segments):
        raise PatternSyntaxError(raw, 0, "pattern does not name any file")

    return Pattern(raw, index, base, tuple(segments), case_sensitive)

def compile_patterns(raw_patterns: Sequence[str], case_sensitive: bool = True,
                     cwd: Optional[Path] = None) -> Tuple[List[Pattern], List[PatternSyntaxError]]:
    """Compiles every pattern, collecting syntax errors instead of stopping at the first."""
    patterns = []
    rejected = []
    for index, raw in enumerate(raw_patterns):
        try:
            patterns.append(compile_pattern(raw, index, case_sensitive, cwd))
        except PatternSyntaxError as e:
            rejected.append(e)
    return patterns, rejected
