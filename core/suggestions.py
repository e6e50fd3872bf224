import json
import logging
import re
import requests
from pathlib import Path
from pydantic import ValidationError
from jinja2 import Environment, FileSystemLoader

from core.config import settings
from core.errors import InvalidSuggestion, SuggestionUnavailable
from core.icons import VALID_ICONS, resolve_icon
from models.suggestion import Suggestion

logger = logging.getLogger(__name__)

MIN_MILESTONES, MAX_MILESTONES = 3, 4
MIN_ACHIEVEMENTS, MAX_ACHIEVEMENTS = 2, 3

# Setup Jinja2 for prompt rendering
template_dir = Path(__file__).parent.parent / settings.PROMPT_FOLDER
env = Environment(loader=FileSystemLoader(str(template_dir)))

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

def render_prompt(end_goal: str) -> str:
    template = env.get_template("milestones.txt")
    return template.render(end_goal=end_goal, icons=VALID_ICONS)

def parse_suggestion(generated_text: str) -> Suggestion:
    """
    Pulls the JSON object out of the model's reply and validates it.

    Too few milestones/achievements, missing fields or wrong types raise
    InvalidSuggestion. Extra entries are dropped and unknown icons replaced.
    """
    match = _JSON_OBJECT.search(generated_text or "")
    if not match:
        raise InvalidSuggestion("No JSON object found in suggestion response")

    try:
        suggestion = Suggestion.model_validate(json.loads(match.group(0)))
    except (json.JSONDecodeError, ValidationError) as e:
        raise InvalidSuggestion(f"Suggestion response has an invalid format: {e}")

    if len(suggestion.milestones) < MIN_MILESTONES:
        raise InvalidSuggestion(f"Expected at least {MIN_MILESTONES} milestones, got {len(suggestion.milestones)}")
    if len(suggestion.achievements) < MIN_ACHIEVEMENTS:
        raise InvalidSuggestion(f"Expected at least {MIN_ACHIEVEMENTS} achievements, got {len(suggestion.achievements)}")

    achievements = [
        a.model_copy(update={"icon_name": resolve_icon(a.icon_name)})
        for a in suggestion.achievements[:MAX_ACHIEVEMENTS]
    ]
    return Suggestion(milestones=suggestion.milestones[:MAX_MILESTONES], achievements=achievements)

def suggest(end_goal: str) -> Suggestion:
    """Asks the text-generation service for milestones and achievements for `end_goal`."""
    if not settings.AI_API_TOKEN:
        raise SuggestionUnavailable("AI_API_TOKEN is not configured")

    try:
        response = requests.post(
            settings.AI_API_URL,
            headers={
                "Authorization": f"Bearer {settings.AI_API_TOKEN}",
                "Content-Type": "application/json",
            },
            json={
                "messages": [{"role": "user", "content": render_prompt(end_goal)}],
                "model": settings.AI_MODEL,
                "stream": False,
            },
            timeout=settings.AI_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        logger.error("Suggestion request failed: %s", e)
        raise SuggestionUnavailable(f"Suggestion service unreachable: {e}")

    if response.status_code != 200:
        logger.error("Suggestion API error: status %s, body %s", response.status_code, response.text)
        raise SuggestionUnavailable(f"Suggestion service error: status {response.status_code}")

    try:
        generated_text = response.json()["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError):
        logger.error("Suggestion response missing content: %s", response.text)
        raise InvalidSuggestion("Suggestion service did not return any text")

    try:
        return parse_suggestion(generated_text)
    except InvalidSuggestion:
        logger.warning("Unusable suggestion for goal %r: %s", end_goal, generated_text)
        raise
