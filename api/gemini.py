# api/gemini.py
import logging
from typing import Any, Optional

import google.generativeai as genai
from langfuse import Langfuse

from api.config import Settings
from api.models import GenerationResult

logger = logging.getLogger(__name__)

MODEL_NAME = "gemini-2.5-flash-preview-09-2025"
EMPTY_RESPONSE_TEXT = "Error: AI returned an empty response."


def build_tracer(settings: Settings) -> Optional[Langfuse]:
    """Returns a Langfuse client when all three keys are configured, otherwise None."""
    if not settings.tracing_enabled:
        return None
    return Langfuse(
        secret_key=settings.langfuse_secret_key,
        public_key=settings.langfuse_public_key,
        host=settings.langfuse_host,
    )


def extract_text(result: Any) -> str:
    """
    Walks candidates[0].content.parts[0].text.

    Every layer is optional on the upstream result; the first missing one
    (or an empty text) gives EMPTY_RESPONSE_TEXT instead of an error.
    """
    candidates = getattr(result, "candidates", None)
    if not candidates:
        return EMPTY_RESPONSE_TEXT

    content = getattr(candidates[0], "content", None)
    if content is None:
        return EMPTY_RESPONSE_TEXT

    parts = getattr(content, "parts", None)
    if not parts:
        return EMPTY_RESPONSE_TEXT

    text = getattr(parts[0], "text", None)
    if not text:
        return EMPTY_RESPONSE_TEXT
    return text


class HandoverSummarizer:
    """
    One-shot summary generation against Gemini.

    The API key is configured once when the summarizer is built (cold start).
    summarize() never raises: failures come back as a GenerationResult with
    the exception message in `error`.
    """

    def __init__(self, settings: Settings, model_name: str = MODEL_NAME, tracer: Optional[Langfuse] = None):
        genai.configure(api_key=settings.gemini_api_key)
        self.model_name = model_name
        self.tracer = tracer

    def build_request(self, user_query: str, system_prompt: Optional[str] = None) -> dict:
        request = {
            "model_name": self.model_name,
            "contents": [{"parts": [{"text": user_query}]}],
        }
        if system_prompt:
            request["system_instruction"] = {"parts": [{"text": system_prompt}]}
        return request

    def summarize(self, user_query: str, system_prompt: Optional[str] = None) -> GenerationResult:
        request = self.build_request(user_query, system_prompt)
        generation = self._start_generation(user_query, system_prompt)

        try:
            model = genai.GenerativeModel(
                model_name=request["model_name"],
                system_instruction=request.get("system_instruction"),
            )
            response = model.generate_content(request["contents"])
            summary_text = extract_text(response)
        except Exception as e:
            logger.exception("Gemini API Error: %s", e)
            self._end_generation(generation, error=str(e))
            return GenerationResult(error=str(e))

        self._end_generation(generation, output=summary_text)
        return GenerationResult(summary=summary_text)

    # --- Langfuse bookkeeping ---
    # Tracing failures are logged and dropped; they never change the result.
    def _start_generation(self, user_query: str, system_prompt: Optional[str]):
        if self.tracer is None:
            return None
        try:
            return self.tracer.start_generation(
                name="handover-summary",
                model=self.model_name,
                input={"userQuery": user_query, "systemPrompt": system_prompt},
            )
        except Exception as e:
            logger.warning("Langfuse trace could not be started: %s", e)
            return None

    def _end_generation(self, generation, output: Optional[str] = None, error: Optional[str] = None):
        if generation is None:
            return
        try:
            if error is not None:
                generation.update(output={"error": error}, level="ERROR", status_message=error)
            else:
                generation.update(output={"summary": output})
            generation.end()
            self.tracer.flush()
        except Exception as e:
            logger.warning("Langfuse trace could not be recorded: %s", e)
