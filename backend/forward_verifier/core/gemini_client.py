from google import genai
from google.genai import types
from forward_verifier.core.config import GEMINI_API_KEY, GEMINI_TIMEOUT_MS


def create_client(api_key: str = GEMINI_API_KEY, timeout_ms: int = GEMINI_TIMEOUT_MS) -> genai.Client:
    """
    Build the single Gemini client shared by every service for the process lifetime.

    Args:
        api_key (str): Gemini API key
        timeout_ms (int): Transport timeout applied to every request

    Returns:
        genai.Client: Configured client
    """
    if not api_key:
        raise ValueError("GEMINI_API_KEY environment variable is not set")
    return genai.Client(
        api_key=api_key,
        http_options=types.HttpOptions(timeout=timeout_ms)
    )
