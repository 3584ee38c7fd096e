"""Plain-text CSV card import.

Format: one card per line. The first comma separated field is the front,
the rest of the line (commas included) is the back. Blank lines and lines
starting with ``#`` are skipped. Rows with an empty side or a side longer
than ``SIDE_MAX_LENGTH`` are dropped without error.
"""

from dataclasses import dataclass
from typing import List

from flashdeck.core.errors import ImportFormatError
from flashdeck.models.card import SIDE_MAX_LENGTH


@dataclass(frozen=True)
class ParsedCard:
    front_side: str
    back_side: str


def parse_csv(text: str) -> List[ParsedCard]:
    cards = []
    # only \n, \r\n and \r end a line; other separators belong to the field text
    for raw_line in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        line = raw_line.strip()
        if not line or raw_line.startswith("#"):
            continue
        front, _, back = line.partition(",")
        front, back = front.strip(), back.strip()
        if not front or not back:
            continue
        if len(front) > SIDE_MAX_LENGTH or len(back) > SIDE_MAX_LENGTH:
            continue
        cards.append(ParsedCard(front, back))
    return cards


def decode_upload(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ImportFormatError("CSV upload is not valid UTF-8", code="csv_decode_failed")


def parse_upload(content: bytes) -> List[ParsedCard]:
    cards = parse_csv(decode_upload(content))
    if not cards:
        raise ImportFormatError("CSV contained no valid rows")
    return cards
