# core/traversal.py

"""Pattern-driven directory walk shared by all patterns of a run."""
import os
import stat
from pathlib import Path
from threading import Event
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from core import matcher
from core.aggregator import ErrorLog
from core.data_structures import ROOT_ERROR, TRAVERSAL_ERROR, CandidateFile, RunConfig
from core.matcher import MatchState
from core.pattern import Pattern
from utils.console import log
from utils.file_utils import file_identity, filter_overlapping_paths, is_subdirectory

# pattern index -> match state after consuming the directory's path
ActiveStates = Dict[int, MatchState]

# directory identity -> (pattern index, match state) pairs already walked there
VisitedDirs = Dict[tuple, Set[Tuple[int, MatchState]]]

class TreeWalker:
    """
    Walks every pattern root once, pruning subtrees no pattern can match.

    A physical directory is entered again only for match states it has not
    been walked with yet, so a directory reached through a symlink alias or a
    second root still serves the patterns active there. The pairs are keyed
    on (device, inode) and live on the walker; since match states are finite,
    symlink cycles stop.
    """

    def __init__(self, patterns: Sequence[Pattern], config: RunConfig, errors: ErrorLog,
                 cancel_event: Optional[Event] = None):
        self.patterns = [p.anchored() for p in patterns]
        self.config = config
        self.errors = errors
        self.cancel_event = cancel_event
        self.visited_dirs: VisitedDirs = {}
        self.roots_resolved = 0
        self.dirs_visited = 0

    def root_groups(self) -> List[Tuple[Path, List[Pattern]]]:
        """Pairs each walk root with the patterns it serves; nested roots fold into their parent."""
        roots = filter_overlapping_paths([p.root for p in self.patterns])
        groups = []
        for root in roots:
            members = [p for p in self.patterns if is_subdirectory(p.root, root)]
            groups.append((Path(root), members))
        return groups

    def walk(self) -> Iterator[CandidateFile]:
        for root, members in self.root_groups():
            if self._cancelled():
                return
            if self.config.debug:
                log("WALK", f"root {root} for pattern(s) {', '.join(p.raw for p in members)}")

            try:
                root_stat = os.stat(root)
            except OSError as e:
                self.errors.add(root, e.strerror or e, ROOT_ERROR)
                continue
            if not stat.S_ISDIR(root_stat.st_mode):
                self.errors.add(root, "not a directory", ROOT_ERROR)
                continue

            self.roots_resolved += 1
            for nested in sorted({p.root for p in members if p.root != root}):
                if os.path.isdir(nested):
                    self.roots_resolved += 1
                else:
                    self.errors.add(nested, "no such directory", ROOT_ERROR)

            states = {}
            for pattern in members:
                state = matcher.start(pattern)
                for component in root.parts[1:]:
                    state = matcher.advance(pattern, state, component)
                if matcher.can_continue(pattern, state):
                    states[pattern.index] = state

            states = self._claim(file_identity(root_stat, root), states)
            if states:
                yield from self._walk_tree(str(root), states)

    def _claim(self, identity: tuple, states: ActiveStates) -> ActiveStates:
        """Marks the states as walked in the directory; returns those not walked there before."""
        seen = self.visited_dirs.setdefault(identity, set())
        fresh = {index: state for index, state in states.items() if (index, state) not in seen}
        seen.update(fresh.items())
        return fresh

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def _walk_tree(self, top: str, top_states: ActiveStates) -> Iterator[CandidateFile]:
        by_index = {p.index: p for p in self.patterns}
        stack = [(top, top_states)]

        while stack:
            if self._cancelled():
                return
            dir_path, active = stack.pop()
            try:
                with os.scandir(dir_path) as it:
                    entries = list(it)
            except OSError as e:
                self.errors.add(dir_path, e.strerror or e, TRAVERSAL_ERROR)
                continue
            self.dirs_visited += 1

            for entry in entries:
                matched = []
                descend = {}
                for index, state in active.items():
                    pattern = by_index[index]
                    next_state = matcher.advance(pattern, state, entry.name)
                    if matcher.accepts(pattern, next_state):
                        matched.append(index)
                    if matcher.can_continue(pattern, next_state):
                        descend[index] = next_state
                if not matched and not descend:
                    continue

                try:
                    is_link = entry.is_symlink()
                    if is_link and not self.config.follow_symlinks:
                        if self.config.debug:
                            log("WALK", f"skipping symlink {entry.path}")
                        continue
                    is_dir = entry.is_dir()
                    is_file = not is_dir and entry.is_file()
                except OSError as e:
                    self.errors.add(entry.path, e.strerror or e, TRAVERSAL_ERROR)
                    continue

                if is_dir:
                    if descend:
                        self._push_dir(stack, entry, descend)
                elif is_file:
                    if matched:
                        yield CandidateFile(Path(entry.path), tuple(matched))
                elif is_link and matched and not os.path.exists(entry.path):
                    self.errors.add(entry.path, "broken symbolic link", TRAVERSAL_ERROR)

    def _push_dir(self, stack: list, entry: os.DirEntry, descend: ActiveStates):
        try:
            # os.stat rather than entry.stat(): scandir leaves st_ino at 0 on Windows
            dir_stat = os.stat(entry.path)
        except OSError as e:
            self.errors.add(entry.path, e.strerror or e, TRAVERSAL_ERROR)
            return
        fresh = self._claim(file_identity(dir_stat, entry.path), descend)
        if not fresh:
            if self.config.debug:
                log("WALK", f"already visited {entry.path}")
            return
        stack.append((entry.path, fresh))
