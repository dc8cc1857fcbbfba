"""
Generative text helpers backed by the Gemini API.

Every public helper sends a single prompt (or a chat history) to the hosted
model and adapts the text it returns. Failures never reach the caller: each
helper logs the error and falls back to a fixed value.
"""
import json
import logging
import re
from functools import lru_cache
from typing import Any, Dict, List, Optional

from google import genai

from dev2050.common.config import settings
from dev2050.modules.ai.schemas import ChatMessage

logger = logging.getLogger(__name__)

FALLBACK_QUOTE = "Build something amazing today."
FALLBACK_CHAT_REPLY = "Sorry, I couldn't process that request right now. Please try again in a moment."

QUOTE_PROMPT = """Generate a short, inspiring motivational quote for developers and tech enthusiasts.
The quote should be original, concise (max 15 words), and related to technology, coding, innovation, or personal growth.
Return ONLY the quote text without quotation marks or attribution."""

ANSWER_PROMPT = """You are a knowledgeable assistant on a developer resources website.
Answer the following search query for a software developer in concise Markdown
(at most 200 words). Include links to official documentation where relevant.

Query: {query}"""

CHAT_INSTRUCTION = (
    "You are an expert AI pair programmer. Help developers answer questions, debug code "
    "and brainstorm ideas. Answer in Markdown and keep code samples minimal and runnable."
)

JSON_BODY_PROMPT = """Generate a realistic JSON request body for the following description:

{prompt}

Return ONLY valid JSON. Do not wrap it in Markdown code fences and do not add explanations."""

LEARNING_PLAN_PROMPT = """Design a personalized learning path for a developer with this profile:
- Current level: {skill_level}
- Target role: {target_role}
- Available time: {hours_per_week} hours per week
- Preferred learning style: {learning_style}
- Skills already known: {current_skills}

Return ONLY a JSON object like this:
{{
  "title": "Path title",
  "description": "One or two sentences",
  "steps": [
    {{"title": "Step title", "description": "What to learn", "estimated_hours": 20, "resources": ["Resource name"]}}
  ]
}}
Use between 4 and 8 steps ordered from first to last. Skip topics the developer already knows."""

_FENCE_START = re.compile(r"^```[\w-]*\s*")
_FENCE_END = re.compile(r"\s*```$")

@lru_cache(maxsize=1)
def get_client() -> genai.Client:
    return genai.Client(api_key=settings.GEMINI_API_KEY)

async def generate_text(contents: Any, system_instruction: Optional[str] = None) -> str:
    """
    Send one generation request and return the stripped response text.
    Raises on transport errors and on empty responses.
    """
    config: Dict[str, Any] = {}
    if system_instruction:
        config["system_instruction"] = system_instruction
    response = await get_client().aio.models.generate_content(
        model=settings.GEMINI_MODEL,
        contents=contents,
        config=config or None,
    )
    text = (response.text or "").strip()
    if not text:
        raise ValueError("Model returned an empty response")
    return text

def strip_code_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE_START.sub("", text)
        text = _FENCE_END.sub("", text)
    return text.strip()

async def get_motivational_quote() -> str:
    try:
        quote = await generate_text(QUOTE_PROMPT)
        return quote.strip().strip('"').strip()
    except Exception as e:
        logger.error("Error generating quote: %s", e)
        return FALLBACK_QUOTE

async def get_ai_answer(query: str) -> Optional[str]:
    if not query or not query.strip():
        return None
    try:
        return await generate_text(ANSWER_PROMPT.format(query=query.strip()))
    except Exception as e:
        logger.error("Error generating AI answer for %r: %s", query, e)
        return None

async def chat(messages: List[ChatMessage]) -> str:
    """
    Send the whole conversation so far and return the model's next reply.
    """
    contents = [
        {"role": message.role.value, "parts": [{"text": message.content}]}
        for message in messages
    ]
    try:
        return await generate_text(contents, system_instruction=CHAT_INSTRUCTION)
    except Exception as e:
        logger.error("Error generating chat reply: %s", e)
        return FALLBACK_CHAT_REPLY

async def generate_request_body(prompt: str) -> Optional[str]:
    """
    Ask the model for a JSON body and return it pretty-printed, or None when the
    model fails or does not produce valid JSON.
    """
    try:
        raw = await generate_text(JSON_BODY_PROMPT.format(prompt=prompt.strip()))
        parsed = json.loads(strip_code_fences(raw))
        return json.dumps(parsed, indent=2, ensure_ascii=False)
    except Exception as e:
        logger.error("Error generating request body: %s", e)
        return None

async def generate_learning_plan(profile: Any) -> Optional[Dict[str, Any]]:
    """
    Ask the model for a learning plan tailored to an onboarding profile.
    Returns the parsed plan when it has a title and at least one usable step.
    """
    prompt = LEARNING_PLAN_PROMPT.format(
        skill_level=profile.skill_level.value,
        target_role=profile.target_role,
        hours_per_week=profile.hours_per_week,
        learning_style=profile.learning_style.value,
        current_skills=", ".join(profile.current_skills) or "none yet",
    )
    try:
        plan = json.loads(strip_code_fences(await generate_text(prompt)))
    except Exception as e:
        logger.error("Error generating learning plan: %s", e)
        return None

    if not isinstance(plan, dict) or not plan.get("title"):
        logger.warning("Discarding learning plan without a title")
        return None
    steps = [
        step for step in plan.get("steps") or []
        if isinstance(step, dict) and step.get("title")
    ]
    if not steps:
        logger.warning("Discarding learning plan without steps")
        return None
    plan["steps"] = steps
    return plan
