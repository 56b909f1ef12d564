"""Static interview question catalog keyed by domain."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

import structlog

from mockprep.config.settings import settings

logger = structlog.get_logger()


class QuestionCatalog:
    """Read-only view over the questions JSON file.

    File layout: {"domains": {"Java": [{"id", "question", "category", "difficulty"}]}}
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        with self.path.open(encoding="utf-8") as f:
            data = json.load(f)
        self._domains: dict[str, list[dict]] = data.get("domains", {})
        logger.info("Question catalog loaded", path=str(self.path), domains=len(self._domains))

    def domains(self) -> list[str]:
        return list(self._domains)

    def questions_for(self, domain: str) -> Optional[list[dict]]:
        """Questions of a domain, or None if the domain is unknown."""
        questions = self._domains.get(domain)
        if questions is None:
            return None
        return [dict(q) for q in questions]


@lru_cache
def get_question_catalog() -> QuestionCatalog:
    """Dependency returning the catalog loaded from QUESTIONS_FILE."""
    return QuestionCatalog(settings.QUESTIONS_FILE)
