"""LLM-based classification of an existing repository."""

import json
import logging
from pathlib import Path
from typing import Optional
from pydantic import ValidationError
from ..llm.prompts import ANALYSIS_PROMPT, ANALYSIS_SYSTEM_PROMPT
from ..llm.provider import LLMProvider
from ..models import RepositoryAnalysis
from ..scanner.structure import RepositoryScanner, truncate
from .json_extract import extract_json


logger = logging.getLogger(__name__)

ANALYSIS_DEFAULTS = {
    "name": "Unknown Project",
    "language": "Unknown",
    "architecture": "Monolith",
    "project_category": "General",
    "business_context": "General purpose software project",
}


class AnalysisError(RuntimeError):
    """The provider answer could not be turned into a RepositoryAnalysis."""


def apply_defaults(analysis: RepositoryAnalysis) -> RepositoryAnalysis:
    """Fill empty required fields; optional fields stay empty."""
    missing = {field: value for field, value in ANALYSIS_DEFAULTS.items() if not getattr(analysis, field)}
    if not missing:
        return analysis
    return analysis.model_copy(update=missing)


class RepositoryAnalyzer:
    """Scans a repository and asks the provider to classify it."""

    def __init__(self, llm_provider: LLMProvider, scanner: Optional[RepositoryScanner] = None):
        """Initialize analyzer.

        Args:
            llm_provider: Provider the scan summary is sent to
            scanner: Structure scanner; a default one is created when omitted
        """
        self.llm = llm_provider
        self.scanner = scanner or RepositoryScanner()

    def analyze(self, repo_path: Path) -> RepositoryAnalysis:
        """Infer a draft profile for ``repo_path``.

        Args:
            repo_path: Repository root

        Returns:
            RepositoryAnalysis with defaults applied to missing required fields

        Raises:
            ProviderError: If the provider call fails
            AnalysisError: If no valid JSON object can be extracted
        """
        scan = self.scanner.scan(repo_path)
        prompt = ANALYSIS_PROMPT.format(scan=scan)

        logger.debug("Analyzing project at %s", repo_path)
        output = self.llm.send(ANALYSIS_SYSTEM_PROMPT, prompt)
        logger.debug("Analysis response (raw): %s", truncate(output, 500))

        return self.parse(output)

    @staticmethod
    def parse(output: str) -> RepositoryAnalysis:
        """Extract and validate the analysis JSON from a raw response."""
        json_text = extract_json(output)
        if not json_text:
            raise AnalysisError("no valid JSON object found in the analysis response")

        data = json.loads(json_text)
        if not isinstance(data, dict):
            raise AnalysisError("analysis response is not a JSON object")

        try:
            analysis = RepositoryAnalysis.model_validate(data)
        except ValidationError as e:
            raise AnalysisError(f"invalid analysis response: {e}") from e

        return apply_defaults(analysis)
