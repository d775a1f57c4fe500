"""
Line-oriented parser that turns uploaded text into candidate questions.

Expected layout::

    1. What is 2 + 2?
    A. 3
    B. 4
    Answer: B

Anything the scanner does not recognise is dropped rather than reported,
so a malformed document yields fewer candidates, never an exception.
"""
import logging
import re
from typing import Iterator, Optional

from examdesk.schemas import CandidateQuestion

logger = logging.getLogger(__name__)

QUESTION_PATTERN = re.compile(r"^[0-9]+[.)]")
OPTION_PATTERN = re.compile(r"^[A-D][.)]")
ANSWER_PREFIX = "answer:"


def parse_content(content: str) -> Iterator[CandidateQuestion]:
    """
    Yield candidate questions in source order.

    The numeric marker stays in the question text. Options and answer lines
    seen before the first numbered line have nowhere to go and are discarded.
    """
    current: Optional[CandidateQuestion] = None

    for raw_line in content.split("\n"):
        line = raw_line.strip()

        if QUESTION_PATTERN.match(line):
            if current is not None:
                yield current
            current = CandidateQuestion(question=line)
        elif OPTION_PATTERN.match(line):
            if current is not None:
                current.options.append(line)
        elif line.lower().startswith(ANSWER_PREFIX):
            if current is not None:
                # Later answer lines win.
                current.correct_answer = line.split(":", 1)[1].strip()
        # Continuation lines are not supported; everything else is ignored.

    if current is not None:
        yield current


def parse_bytes(data: bytes) -> Iterator[CandidateQuestion]:
    """Decode an uploaded payload as UTF-8 and parse it."""
    text = data.decode("utf-8", errors="replace")
    logger.debug("Parsing %d characters of uploaded text", len(text))
    return parse_content(text)
