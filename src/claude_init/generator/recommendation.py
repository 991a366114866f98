"""Recommendation of agents, commands and skills for a project."""

import json
import logging
from typing import Optional
from pydantic import ValidationError
from ..analyzer.json_extract import extract_json
from ..llm.provider import LLMProvider, ProviderError
from ..models import ProjectProfile, Recommendation
from .composer import PromptComposer, build_system_prompt
from .naming import merge_unique, sanitize


logger = logging.getLogger(__name__)

DEFAULT_AGENTS = ["architect", "developer", "tester", "reviewer"]
DEFAULT_COMMANDS = ["test", "lint", "build"]

# Architectures whose default recommendation includes a debugger agent
DEBUGGER_ARCHITECTURES = {"Microservicios", "DDD", "Hexagonal", "Event-Driven", "Serverless"}


def default_recommendation(profile: ProjectProfile) -> Recommendation:
    """Deterministic recommendation used whenever the provider cannot help."""
    agents = list(DEFAULT_AGENTS)
    if profile.architecture in DEBUGGER_ARCHITECTURES:
        agents.append("debugger")

    skills = [sanitize(profile.language)]
    if profile.framework:
        skills.append(sanitize(profile.framework))

    return Recommendation(
        agents=agents,
        commands=list(DEFAULT_COMMANDS),
        skills=skills,
        description=f"Default structure for {profile.name} ({profile.language})",
    )


def normalize(recommendation: Recommendation) -> Recommendation:
    """Sanitize every identifier and drop repeats; the description is kept verbatim."""
    return Recommendation(
        agents=merge_unique((sanitize(name) for name in recommendation.agents), ()),
        commands=merge_unique((sanitize(name) for name in recommendation.commands), ()),
        skills=merge_unique((sanitize(name) for name in recommendation.skills), ()),
        description=recommendation.description,
    )


class RecommendationEngine:
    """Asks the provider which artifacts suit a project."""

    def __init__(self, llm_provider: LLMProvider, composer: Optional[PromptComposer] = None):
        self.llm = llm_provider
        self.composer = composer

    def recommend(self, profile: ProjectProfile, system_prompt: str = "") -> Recommendation:
        """Return the provider's recommendation, or the default on any failure.

        Args:
            profile: Target project
            system_prompt: System prompt to send; the base prompt when empty

        Returns:
            Recommendation with sanitized names
        """
        composer = self.composer or PromptComposer(profile, self.llm.provider_id)
        prompt = composer.recommendation_prompt()

        try:
            output = self.llm.send(system_prompt or build_system_prompt(), prompt)
        except ProviderError as e:
            logger.warning("Recommendation request failed, using defaults: %s", e)
            return default_recommendation(profile)

        json_text = extract_json(output)
        if not json_text:
            logger.warning("No JSON found in the recommendation, using defaults")
            return default_recommendation(profile)

        try:
            recommendation = Recommendation.model_validate(json.loads(json_text))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("Invalid recommendation, using defaults: %s", e)
            return default_recommendation(profile)

        return normalize(recommendation)
