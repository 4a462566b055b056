from __future__ import annotations

import random
from importlib import resources
from pathlib import Path

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from decodey.core.errors import QuoteNotFoundError
from decodey.core.models.quote import Quote, QuoteCollection
from decodey.core.utils import make_rng
from decodey.core.validator import ValidationIssue, validate_payload
from decodey.logging import get_logger

log = get_logger(__name__)

BUNDLED_QUOTES = "quotes.yaml"


def _read_bundled() -> str:
    return resources.files("decodey.data").joinpath(BUNDLED_QUOTES).read_text(encoding="utf-8")


class YamlQuoteProvider:
    """Quote source backed by a YAML file, or the bundled quotes when no path is given."""

    def __init__(self, path: Path | None = None, rng: random.Random | None = None) -> None:
        self._yaml = YAML(typ="safe")
        self._path = path
        self._rng = rng or make_rng()
        self._quotes: list[Quote] | None = None

    @property
    def source(self) -> str:
        return str(self._path) if self._path else f"bundled:{BUNDLED_QUOTES}"

    def _read_text(self, path: Path | None) -> str:
        if path is None:
            return _read_bundled()
        return path.read_text(encoding="utf-8")

    def _parse(self, text: str) -> dict[str, object]:
        parsed = self._yaml.load(text)
        if not isinstance(parsed, dict):
            raise ValueError("Quotes YAML must be a mapping at the top level.")
        return parsed

    def _validate_raw(self, raw: dict[str, object]) -> list[ValidationIssue]:
        issues = validate_payload(raw)
        if issues:
            return issues
        try:
            QuoteCollection.from_raw(raw)
        except ValidationError as exc:
            for error in exc.errors():
                path_str = ".".join(str(part) for part in error.get("loc", ()))
                issues.append(ValidationIssue(path=path_str, message=error.get("msg", "")))
        return issues

    def validate(self, path: Path | None = None) -> list[ValidationIssue]:
        """Validate a quotes file without caching it."""
        try:
            raw = self._parse(self._read_text(path or self._path))
        except YAMLError as exc:
            return [ValidationIssue(path="", message=f"Invalid YAML: {exc}")]
        except ValueError as exc:
            return [ValidationIssue(path="", message=str(exc))]
        return self._validate_raw(raw)

    def quotes(self) -> list[Quote]:
        if self._quotes is not None:
            return self._quotes
        try:
            raw = self._parse(self._read_text(self._path))
        except (OSError, YAMLError, ValueError) as exc:
            raise QuoteNotFoundError(f"Failed to read quotes from {self.source}: {exc}") from exc
        issues = self._validate_raw(raw)
        if issues:
            formatted = "; ".join(f"{issue.path}: {issue.message}" for issue in issues)
            raise QuoteNotFoundError(f"Quotes validation failed: {formatted}")
        self._quotes = QuoteCollection.from_raw(raw).quotes
        log.debug("quotes_loaded", source=self.source, count=len(self._quotes))
        return self._quotes

    def get_random_quote(self) -> Quote:
        quotes = self.quotes()
        if not quotes:
            raise QuoteNotFoundError(f"No quotes available in {self.source}")
        return self._rng.choice(quotes)
