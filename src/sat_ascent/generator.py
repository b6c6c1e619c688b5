"""Gemini-backed question and feedback generation."""
import json
import logging
import random
import re

from sat_ascent.config import GEMINI_API_KEY, GEMINI_MODEL, OPTION_KEYS, TOPICS
from sat_ascent.models import Question

logger = logging.getLogger(__name__)

FALLBACK_FEEDBACK = {
    "correct": "Great job!",
    "incorrect": "Keep practicing, you'll get it!",
}

QUESTION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "question": {"type": "STRING"},
        "topic": {"type": "STRING"},
        "options": {
            "type": "OBJECT",
            "properties": {key: {"type": "STRING"} for key in OPTION_KEYS},
            "required": list(OPTION_KEYS),
        },
        "correctAnswer": {"type": "STRING"},
        "explanation": {"type": "STRING"},
    },
    "required": ["question", "topic", "options", "correctAnswer", "explanation"],
}

QUESTION_PROMPT = (
    'Generate a multiple-choice SAT {subject} question about "{topic}" with '
    "{difficulty} difficulty. Provide the question, 4 options (A, B, C, D), the "
    "correct answer key (A, B, C, or D), and a brief, clear explanation for the "
    "correct answer."
)

FEEDBACK_PROMPT = (
    'I am an SAT student. I just answered a question on the topic of "{topic}". '
    "My answer was {outcome}. Give me a very short (1-2 sentences), encouraging, "
    "coach-like feedback message. If my answer was incorrect, offer a brief, "
    "positive tip related to the topic without revealing the answer again."
)


class GenerationError(RuntimeError):
    """The model call failed or returned an unusable question."""


class FeedbackError(RuntimeError):
    """The model call for tutor feedback failed."""


def pick_topic(subject: str, rng=random) -> str:
    if subject not in TOPICS:
        raise ValueError(f"Unknown subject: {subject!r}")
    return rng.choice(TOPICS[subject])


def parse_json_payload(text: str):
    """Decode JSON from model output, tolerating ```json fences around it."""
    cleaned = (text or "").strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass
    match = re.search(r"```(?:json)?\s*\n(.*?)\n```", cleaned, re.DOTALL)
    if match:
        return json.loads(match.group(1).strip())
    match = re.search(r"\{.*\}", cleaned, re.DOTALL)
    if match:
        return json.loads(match.group(0))
    raise json.JSONDecodeError("No JSON object found in response", cleaned, 0)


def validate_question(data, subject: str, difficulty: str) -> Question:
    if not isinstance(data, dict):
        raise GenerationError("Question payload is not an object")
    for field_name in ("question", "topic", "correctAnswer", "explanation"):
        if not isinstance(data.get(field_name), str) or not data[field_name].strip():
            raise GenerationError(f"Question payload missing {field_name!r}")
    options = data.get("options")
    if not isinstance(options, dict) or set(options) != set(OPTION_KEYS):
        raise GenerationError(f"Question options must be exactly {', '.join(OPTION_KEYS)}")
    if not all(isinstance(v, str) for v in options.values()):
        raise GenerationError("Question options must be text")
    correct = data["correctAnswer"].strip().upper()
    if correct not in OPTION_KEYS:
        raise GenerationError(f"Correct answer {data['correctAnswer']!r} is not an option key")
    return Question(
        prompt=data["question"].strip(),
        options={key: options[key] for key in OPTION_KEYS},
        correct_option_key=correct,
        explanation=data["explanation"].strip(),
        subject=subject,
        topic=data["topic"].strip(),
        difficulty=difficulty,
    )


class QuestionGenerator:
    """Thin wrapper over a google-genai client.

    Tests pass their own `client`; anything exposing
    `client.models.generate_content(...)` with a `.text` response works.
    """

    def __init__(self, client=None, model: str = GEMINI_MODEL):
        if client is None:
            from google import genai
            client = genai.Client(api_key=GEMINI_API_KEY)
        self.client = client
        self.model = model

    def generate_question(self, subject: str, difficulty: str) -> Question:
        topic = pick_topic(subject)
        prompt = QUESTION_PROMPT.format(subject=subject, topic=topic, difficulty=difficulty)
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config={
                    "response_mime_type": "application/json",
                    "response_schema": QUESTION_SCHEMA,
                    "temperature": 1.2,
                },
            )
            data = parse_json_payload(response.text)
        except Exception as e:
            logger.warning("Question generation failed for %s/%s: %s", subject, difficulty, e)
            raise GenerationError(
                "Failed to communicate with the AI model. Please check your connection or API key."
            ) from e
        question = validate_question(data, subject, difficulty)
        logger.info("Generated %s %s question on %s", difficulty, subject, question.topic)
        return question

    def generate_feedback(self, outcome: str, question: Question) -> str:
        prompt = FEEDBACK_PROMPT.format(topic=question.topic, outcome=outcome)
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config={"temperature": 0.8, "max_output_tokens": 50},
            )
            text = (response.text or "").strip().replace('"', "")
        except Exception as e:
            raise FeedbackError(f"Tutor feedback failed: {e}") from e
        if not text:
            raise FeedbackError("Tutor feedback was empty")
        return text


def feedback_or_default(generator: QuestionGenerator, outcome: str, question: Question) -> str:
    """Tutor feedback, or the fixed encouragement when the model call fails."""
    try:
        return generator.generate_feedback(outcome, question)
    except FeedbackError as e:
        logger.warning("Falling back to default feedback: %s", e)
        return FALLBACK_FEEDBACK[outcome]
