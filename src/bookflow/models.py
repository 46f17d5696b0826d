"""Data models for manuscripts, chapters, and footnotes."""

import json
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Footnote:
    """A single footnote, rendered as ``marker + separator + content``."""

    marker: str
    content: str


@dataclass(frozen=True)
class Chapter:
    """Represents one chapter with its raw multi-line body text."""

    title: str
    body: str = ""
    footnotes: list[Footnote] = field(default_factory=list)

    def body_lines(self) -> list[str]:
        """
        Split the raw body into logical lines on "\n" only.

        A trailing "\r" is dropped from each line and a final newline does not
        start an extra line, so an empty body yields no lines at all. Other
        Unicode line separators stay inside their line.

        Returns:
            Lines without their line terminators.
        """
        lines = self.body.split("\n")
        if lines[-1] == "":
            lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass(frozen=True)
class Manuscript:
    """Represents a whole manuscript ready for export."""

    title: str
    author: str = ""
    chapters: list[Chapter] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Manuscript":
        """
        Build a manuscript from a parsed project document.

        Accepts the editor's project layout (``metadata.title``,
        ``chapters[].content``) as well as a flat layout (``title``,
        ``chapters[].body``). Unknown keys are ignored.

        Args:
            data: Parsed JSON object.

        Returns:
            Manuscript instance.

        Raises:
            ValueError: If the document is not a JSON object or a chapter is malformed.
        """
        if not isinstance(data, dict):
            raise ValueError("Project document must be a JSON object")

        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise ValueError("Project metadata must be a JSON object")
        title = metadata.get("title", data.get("title", ""))
        author = metadata.get("author", data.get("author", ""))

        chapters = []
        for index, raw in enumerate(data.get("chapters") or []):
            if not isinstance(raw, dict):
                raise ValueError(f"Chapter {index + 1} must be a JSON object")
            footnotes = []
            for note in raw.get("footnotes") or []:
                if not isinstance(note, dict):
                    raise ValueError(f"Footnote in chapter {index + 1} must be a JSON object")
                footnotes.append(Footnote(marker=str(note.get("marker", "")), content=str(note.get("content", ""))))
            body = raw.get("content", raw.get("body", ""))
            chapters.append(Chapter(title=str(raw.get("title", "")), body=str(body or ""), footnotes=footnotes))

        return cls(title=str(title or ""), author=str(author or ""), chapters=chapters)


def load_manuscript(path: Path) -> Manuscript:
    """
    Load a manuscript from a project file (``.hype`` or plain JSON).

    Args:
        path: Path to the project file.

    Returns:
        Parsed Manuscript.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not valid JSON or has the wrong shape.
    """
    if not path.exists():
        raise FileNotFoundError(f"Project file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid project file {path}: {e}") from e

    return Manuscript.from_dict(data)
