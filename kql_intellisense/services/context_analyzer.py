"""Context Analyzer — classify where the user is inside a partial KQL query.

Works on raw, unparsed text. Only the last line is inspected for the
position: its trailing token is the word being typed and the token before
it decides which grammatical slot comes next. The cursor position is not
consulted; completion always happens at the end of the text.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto

from kql_intellisense.schemas.schema import TableSchema, WorkspaceSchema

PIPE = "|"
COMMENT_PREFIX = "//"

COLUMN_KEYWORDS = frozenset({"where", "extend", "project"})
GROUPING_KEYWORDS = frozenset({"by", "on"})
SUMMARIZE_KEYWORD = "summarize"
TIME_MARKERS = ("ago", "between")

_WHITESPACE = re.compile(r"\s+")


class Position(Enum):
    START_OF_QUERY = auto()
    AFTER_COLUMN_KEYWORD = auto()
    AFTER_GROUPING_KEYWORD = auto()
    AFTER_SUMMARIZE = auto()
    GENERAL_TOKEN = auto()


@dataclass(frozen=True)
class QueryContext:
    full_text: str
    current_line: str
    current_word: str
    previous_word: str
    position: Position
    time_context: bool = False

    @property
    def at_pipe(self) -> bool:
        """True when the token being typed is a bare pipe."""
        if self.current_word == PIPE:
            return True
        return self.current_word == "" and self.previous_word == PIPE


def tokenize_line(line: str) -> list[str]:
    """Split a line on whitespace runs.

    A line ending in whitespace yields a trailing empty token: the user has
    finished the previous word and not started the next one.
    """
    return _WHITESPACE.split(line)


def classify(current_line: str, current_word: str, previous_word: str) -> Position:
    if current_line.strip() == "":
        return Position.START_OF_QUERY
    if current_word == PIPE or (current_word == "" and previous_word == PIPE):
        return Position.START_OF_QUERY

    previous = previous_word.lower()
    if previous in COLUMN_KEYWORDS:
        return Position.AFTER_COLUMN_KEYWORD
    if previous in GROUPING_KEYWORDS:
        return Position.AFTER_GROUPING_KEYWORD
    if previous == SUMMARIZE_KEYWORD:
        return Position.AFTER_SUMMARIZE
    return Position.GENERAL_TOKEN


def is_time_context(current_word: str) -> bool:
    return any(marker in current_word for marker in TIME_MARKERS)


def analyze(full_text: str) -> QueryContext:
    """Build the QueryContext for ``full_text``. Never raises.

    Anything that is not a string is treated as an empty general token.
    """
    if not isinstance(full_text, str):
        return QueryContext(
            full_text="",
            current_line="",
            current_word="",
            previous_word="",
            position=Position.GENERAL_TOKEN,
        )

    current_line = full_text.split("\n")[-1]
    tokens = tokenize_line(current_line)
    current_word = tokens[-1]
    previous_word = tokens[-2] if len(tokens) >= 2 else ""

    return QueryContext(
        full_text=full_text,
        current_line=current_line,
        current_word=current_word,
        previous_word=previous_word,
        position=classify(current_line, current_word, previous_word),
        time_context=is_time_context(current_word),
    )


def extract_current_table(
    full_text: str, schema: WorkspaceSchema | None
) -> TableSchema | None:
    """Find the table the query reads from.

    The first line that is neither blank, a ``//`` comment nor a ``|``
    continuation and whose first token names a known table wins.
    Matching is exact and case-sensitive.
    """
    if schema is None or not isinstance(full_text, str):
        return None

    for line in full_text.split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue
        if stripped.startswith(PIPE):
            continue
        table = schema.find_table(stripped.split()[0])
        if table is not None:
            return table
    return None
