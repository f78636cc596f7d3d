import requests
from ..config import GOOGLE_API_KEY, GEMINI_MODEL_ID
from ..logging_config import get_logger

logger = get_logger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


def call_gemini_text(prompt: str, temperature: float = 0.4, max_tokens: int = 300) -> str:
    """
    Call Gemini API expecting a short plain-text reply.

    Args:
        prompt: Full prompt text
        temperature: Sampling temperature
        max_tokens: Max output tokens

    Returns:
        Reply text, or empty string if the key is missing or the call failed
    """
    if not GOOGLE_API_KEY:
        return ""

    payload = {
        "contents": [{
            "parts": [{"text": prompt}]
        }],
        "generationConfig": {
            "temperature": temperature,
            "maxOutputTokens": max_tokens
        }
    }

    try:
        resp = requests.post(
            GEMINI_URL.format(model=GEMINI_MODEL_ID),
            params={"key": GOOGLE_API_KEY},
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=15,
        )
        resp.raise_for_status()
        return resp.json()["candidates"][0]["content"]["parts"][0]["text"].strip()
    except (requests.RequestException, KeyError, IndexError, ValueError) as e:
        logger.warning("Gemini request failed: %s", e)
        return ""
