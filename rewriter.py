"""Figma link detection and marker insertion for clipboard text.

Three rewrite policies are available; ``rewrite`` (grouped) is the default.
All of them are pure functions of the input string and never raise.
"""
import logging
import re
from collections import namedtuple

log = logging.getLogger(__name__)

MARKER = "**[VPN, PROXY]** "
TARGET_HOST = "figma.com"

# scheme, optional www., fixed host, optional path; ends at whitespace or a comma
LINK_PATTERN = r"https?://(?:www\.)?figma\.com(?:[/?#:][^\s,]*)?(?![^\s,])"

Link = namedtuple("Link", ["start", "end", "text"])

# edit = (start, end, replacement) against the original string
Edit = namedtuple("Edit", ["start", "end", "replacement"])

_PATTERNS = None


class _Patterns:
    def __init__(self):
        self.link = re.compile(LINK_PATTERN, re.IGNORECASE)
        # a line holding exactly one link and nothing else
        self.link_line = re.compile(r"\s*(" + LINK_PATTERN + r")\s*", re.IGNORECASE)
        # two or more links on one line separated by commas/spaces/tabs
        self.delimited = re.compile(
            r"(?:" + LINK_PATTERN + r")(?:[, \t]+(?:" + LINK_PATTERN + r"))+",
            re.IGNORECASE,
        )


def _get_patterns():
    global _PATTERNS
    if _PATTERNS is None:
        try:
            _PATTERNS = _Patterns()
        except re.error as e:
            log.error("failed to compile link patterns, rewriting disabled: %s", e)
            _PATTERNS = False
    return _PATTERNS or None


def find_links(text):
    """Return every target link in ``text`` as a list of ``Link`` tuples."""
    patterns = _get_patterns()
    if patterns is None or not text:
        return []
    return [Link(m.start(), m.end(), m.group(0)) for m in patterns.link.finditer(text)]


def _overlaps(start, end, ranges):
    return any(start < r_end and r_start < end for r_start, r_end in ranges)


def _iter_lines(text):
    offset = 0
    for line in text.split("\n"):
        yield offset, line
        offset += len(line) + 1


def _newline_groups(text, patterns):
    """Find runs of consecutive link-only lines.

    Returns a list of (claimed_range, edit) pairs, one per run of two or more
    lines. The marker goes right before the first link of the run.
    """
    groups = []
    run = []

    def flush():
        if len(run) >= 2:
            first_start = run[0][0]
            groups.append(((first_start, run[-1][1]), Edit(first_start, first_start, MARKER)))
        del run[:]

    for offset, line in _iter_lines(text):
        m = patterns.link_line.fullmatch(line)
        if m:
            run.append((offset + m.start(1), offset + m.end(1)))
        else:
            flush()
    flush()
    return groups


def _delimited_groups(text, patterns, claimed):
    groups = []
    for m in patterns.delimited.finditer(text):
        if _overlaps(m.start(), m.end(), claimed):
            continue
        links = [link.group(0) for link in patterns.link.finditer(m.group(0))]
        if len(links) < 2:
            continue
        replacement = MARKER + links[0] + ", " + ", ".join(links[1:])
        groups.append(((m.start(), m.end()), Edit(m.start(), m.end(), replacement)))
    return groups


def apply_edits(text, edits):
    """Splice ``edits`` into ``text`` in one left-to-right pass.

    Edits that fall outside the string or overlap an earlier edit are skipped;
    the remaining ones are still applied.
    """
    pieces = []
    cursor = 0
    for edit in sorted(edits):
        if edit.start < cursor or edit.start > edit.end or edit.end > len(text):
            log.debug("skipping edit at %d:%d", edit.start, edit.end)
            continue
        pieces.append(text[cursor:edit.start])
        pieces.append(edit.replacement)
        cursor = edit.end
    pieces.append(text[cursor:])
    return "".join(pieces)


def plan_edits(text):
    """Compute the non-overlapping edits the grouped policy would make."""
    patterns = _get_patterns()
    if patterns is None:
        return []

    claimed = []
    edits = []
    for group_range, edit in _newline_groups(text, patterns):
        claimed.append(group_range)
        edits.append(edit)
    for group_range, edit in _delimited_groups(text, patterns, claimed):
        claimed.append(group_range)
        edits.append(edit)

    # identical urls at different offsets are distinct; only ranges count
    for link in find_links(text):
        if not _overlaps(link.start, link.end, claimed):
            edits.append(Edit(link.start, link.start, MARKER))
    return edits


def rewrite(text):
    """Insert the marker before each Figma link or link group in ``text``.

    Text that already contains the marker anywhere is returned unchanged, so
    a second pass over the output is always a no-op.
    """
    if not isinstance(text, str) or not text or MARKER in text:
        return text
    edits = plan_edits(text)
    if not edits:
        return text
    return apply_edits(text, edits)


def rewrite_each(text):
    """Insert the marker before every link, without grouping."""
    if not isinstance(text, str) or not text or MARKER in text:
        return text
    edits = [Edit(link.start, link.start, MARKER) for link in find_links(text)]
    if not edits:
        return text
    return apply_edits(text, edits)


def rewrite_global(text):
    """Prepend the marker once to any text mentioning the Figma host."""
    if not isinstance(text, str) or not text:
        return text
    if TARGET_HOST in text.lower() and not text.startswith(MARKER):
        return MARKER + text
    return text


REWRITE_MODES = {
    "grouped": rewrite,
    "each": rewrite_each,
    "global": rewrite_global,
}

DEFAULT_MODE = "grouped"


def get_rewriter(mode):
    rewriter = REWRITE_MODES.get(mode)
    if rewriter is None:
        log.warning("unknown rewrite mode %r, using %r", mode, DEFAULT_MODE)
        rewriter = REWRITE_MODES[DEFAULT_MODE]
    return rewriter
