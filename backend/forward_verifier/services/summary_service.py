from google import genai
from forward_verifier.core.config import SUMMARY_MODEL

FALLBACK_SUMMARY = "Verification complete."


class SummaryService:
    """
    Produces a short shareable line for a finished fact-check.

    The summary is cosmetic: every failure degrades to FALLBACK_SUMMARY and
    nothing is raised to the caller.
    """

    def __init__(self, client: genai.Client, model: str = SUMMARY_MODEL):
        self.client = client
        self.model = model

    def summarize(self, explanation: str, verdict: str) -> str:
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=(
                    f"Write a 10-word warning/confirmation for a user about this fact-check: "
                    f"Verdict: {verdict}, Details: {explanation}. Be urgent and clear."
                ),
            )
            summary = (response.text or "").strip().strip('"').strip()
            if not summary:
                print("[SUMMARY] Empty summary response, using fallback")
                return FALLBACK_SUMMARY
            return summary

        except Exception as e:
            print(f"[SUMMARY] Summary generation error: {str(e)}")
            return FALLBACK_SUMMARY
