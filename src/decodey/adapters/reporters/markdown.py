from __future__ import annotations

from decodey.adapters.reporters.base import ReporterBase
from decodey.core.config import DecodeyConfig
from decodey.core.models.session import PuzzleSession
from decodey.core.scoring import compute_score
from decodey.core.state import letter_statuses


def format_duration(seconds: int) -> str:
    minutes, remainder = divmod(max(0, seconds), 60)
    return f"{minutes}:{remainder:02d}"


class MarkdownReporter(ReporterBase):
    content_type = "text/markdown"
    file_extension = "md"

    def generate(self, session: PuzzleSession, config: DecodeyConfig) -> bytes:
        # The plaintext stays hidden until the game is over.
        solution = session.source_text if session.is_terminal else session.display_text
        lines = [
            f"# decodey game {session.id}",
            "",
            f"Status: {session.status.value}",
            f"Difficulty: {session.difficulty.value}",
            f"Mistakes: {session.mistake_count}/{session.max_mistakes}",
            f"Time: {format_duration(session.elapsed_seconds)}",
            f"Score: {compute_score(session, config.penalty_per_mistake)}",
            "",
            "## Puzzle",
            "",
            "```",
            session.cipher_text,
            solution,
            "```",
        ]
        if session.is_terminal and session.author:
            lines.extend(["", f"-- {session.author}"])
        lines.extend(
            [
                "",
                "## Letters",
                "",
                "| Cipher | Count | Plain |",
                "| --- | --- | --- |",
            ]
        )
        for status in letter_statuses(session):
            lines.append(f"| {status.cipher} | {status.count} | {status.plain or ''} |")
        lines.append("")
        return "\n".join(lines).encode("utf-8")
