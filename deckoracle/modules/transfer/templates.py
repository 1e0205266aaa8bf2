"""Sample import files offered to users as starting points."""

import json

from .codecs import get_codec
from .schemas import ExportPayload, TransferFormat

TEMPLATE_STEM = "import_template"

JSON_TEMPLATE = json.dumps(
    {
        "title": "Sample Deck",
        "description": "Description of your deck",
        "cards": [
            {"front": "Question 1", "back": "Answer 1", "tags": ["tag1", "tag2"]},
            {"front": "Question 2", "back": "Answer 2", "tags": ["tag3"]},
        ],
    },
    indent=2,
).encode("utf-8")

CSV_TEMPLATE = (
    b"Front,Back,Tags,Explanation,Difficulty\n"
    b'Question 1,Answer 1,"tag1,tag2",Optional explanation,1\n'
    b"Question 2,Answer 2,tag3,Another explanation,2\n"
)

ANKI_TEMPLATE = json.dumps(
    {
        "name": "Sample Deck",
        "desc": "Description of your deck",
        "notes": [
            {"id": 1, "guid": "", "mid": 1, "fields": ["Question 1", "Answer 1"], "tags": ["tag1"]},
            {"id": 2, "guid": "", "mid": 1, "fields": ["Question 2", "Answer 2"], "tags": []},
        ],
        "cards": [
            {"nid": 1, "ord": 0, "did": 1, "due": 0, "ivl": 0, "factor": 2500, "reps": 0, "lapses": 0},
            {"nid": 2, "ord": 0, "did": 1, "due": 0, "ivl": 0, "factor": 2500, "reps": 0, "lapses": 0},
        ],
        "models": [
            {
                "id": 1,
                "name": "Basic",
                "flds": [{"name": "Front", "ord": 0}, {"name": "Back", "ord": 1}],
                "tmpls": [
                    {
                        "name": "Card 1",
                        "qfmt": "{{Front}}",
                        "afmt": '{{FrontSide}}<hr id="answer">{{Back}}',
                    }
                ],
            }
        ],
    },
    indent=2,
).encode("utf-8")

MARKDOWN_TEMPLATE = (
    b"# Deck Title\n\n"
    b"Optional deck description goes here.\n\n"
    b"---\n\n"
    b"## Card 1\n\n"
    b"**Front:** Question 1\n\n"
    b"**Back:** Answer 1\n\n"
    b"---\n\n"
    b"## Card 2\n\n"
    b"**Front:** Question 2\n\n"
    b"**Back:** Answer 2\n\n"
    b"---\n"
)

TEMPLATES: dict[TransferFormat, bytes] = {
    TransferFormat.JSON: JSON_TEMPLATE,
    TransferFormat.CSV: CSV_TEMPLATE,
    TransferFormat.ANKI: ANKI_TEMPLATE,
    TransferFormat.MARKDOWN: MARKDOWN_TEMPLATE,
}


def get_template(format: str | TransferFormat) -> ExportPayload:
    """Sample payload for ``format``, served as ``import_template.<ext>``.

    Raises:
        UnsupportedFormatError: Unknown format.
    """
    codec = get_codec(format)
    return ExportPayload(
        content=TEMPLATES[codec.format],
        content_type=codec.content_type,
        extension=codec.extension,
        filename=codec.filename(TEMPLATE_STEM),
    )
