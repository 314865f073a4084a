from typing import List
from google import genai
from google.genai import types
from forward_verifier.core.config import VERIFY_MODEL
from forward_verifier.core.errors import (
    MalformedPayload,
    MalformedResponse,
    VerificationUnavailable,
)
from forward_verifier.models.claim import Category, Citation, Verdict, VerificationResult
from forward_verifier.services.response_parser import ResponseParser

SYSTEM_INSTRUCTION = (
    "You are a strict, logical fact-checker. You prioritize official sources "
    "(NASA, WHO, Gov sites). You do not hedge on obvious facts. "
    "Your output is always valid JSON."
)

DEFAULT_EXPLANATION = "No explanation provided."
DEFAULT_CITATION_TITLE = "Source Link"


def build_verification_prompt(claim: str) -> str:
    return f"""You are an expert fact-checker. Your task is to verify this claim: "{claim}"

PROTOCOL:
1. Use the Google Search tool to find recent and credible evidence.
2. If the claim is scientifically impossible (e.g., "The sun is green") or obviously false, verify it as "False" immediately, even if specific news articles don't exist.
3. If the claim is a known hoax/satire, mark it "False" or "Misleading".
4. If true, mark "True".

OUTPUT FORMAT:
Return ONLY a raw JSON object. Do not output Markdown code blocks.
{{
  "verdict": "True" | "False" | "Unverified" | "Misleading",
  "confidence": number (0-100),
  "explanation": "A professional, direct explanation of the facts. Max 3 sentences.",
  "category": "Medical" | "Financial" | "Political" | "Science" | "Other"
}}"""


class VerificationService:
    """
    Fact-checks a claim with a search-grounded Gemini call.

    The response text is parsed into a loose mapping, normalized into a
    VerificationResult, and citations are taken from the grounding metadata
    of the first candidate.
    """

    def __init__(self, client: genai.Client, model: str = VERIFY_MODEL, parser: ResponseParser = None):
        self.client = client
        self.model = model
        self.parser = parser or ResponseParser()

    def verify(self, claim: str) -> VerificationResult:
        """
        Verify a single claim.

        Args:
            claim (str): Claim text, already known to be non-empty

        Returns:
            VerificationResult: Normalized verdict without a summary

        Raises:
            VerificationUnavailable: Backend failed or returned no text
            MalformedResponse: Backend answered with unparseable text
        """
        try:
            print(f"[VERIFY] Checking claim: {claim[:80]}")
            response = self.client.models.generate_content(
                model=self.model,
                contents=build_verification_prompt(claim),
                config=types.GenerateContentConfig(
                    # responseMimeType cannot be combined with the search tool
                    tools=[types.Tool(google_search=types.GoogleSearch())],
                    system_instruction=SYSTEM_INSTRUCTION,
                ),
            )

            result_text = response.text
            if not result_text or not result_text.strip():
                raise VerificationUnavailable("No response from verification model")

            try:
                payload = self.parser.parse(result_text)
            except MalformedPayload as e:
                print(f"[VERIFY] JSON parse failure. Raw response: {e.text}")
                raise MalformedResponse() from e

            citations = extract_citations(response)
            result = normalize_payload(payload, citations)
            print(f"[VERIFY] Verdict: {result.verdict.value} ({result.confidence}%), {len(citations)} citations")
            return result

        except (MalformedResponse, VerificationUnavailable):
            raise
        except Exception as e:
            print(f"[VERIFY] Verification error: {str(e)}")
            raise VerificationUnavailable() from e


def extract_citations(response: types.GenerateContentResponse) -> List[Citation]:
    """
    Collect {title, url} pairs from the first candidate's grounding chunks.

    Absence at any level (candidates, metadata, chunks) yields an empty list.
    Chunks without a web URI are skipped.
    """
    citations = []

    candidates = response.candidates
    if not candidates:
        return citations

    metadata = candidates[0].grounding_metadata
    if metadata is None:
        return citations

    chunks = metadata.grounding_chunks
    if not chunks:
        return citations

    for chunk in chunks:
        web = chunk.web
        if web is None or not web.uri:
            continue
        citations.append(Citation(title=web.title or DEFAULT_CITATION_TITLE, url=web.uri))

    return citations


def normalize_confidence(value) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(0, min(100, value))
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if number != number:  # NaN
        return 0
    return int(round(max(0.0, min(100.0, number))))


def normalize_payload(payload: dict, citations: List[Citation]) -> VerificationResult:
    """Coerce a parsed mapping into result fields; missing or unknown values only default."""
    explanation = payload.get("explanation")
    if not isinstance(explanation, str) or not explanation.strip():
        explanation = DEFAULT_EXPLANATION

    return VerificationResult(
        verdict=Verdict.coerce(payload.get("verdict")),
        confidence=normalize_confidence(payload.get("confidence")),
        explanation=explanation.strip(),
        category=Category.coerce(payload.get("category")),
        citations=citations,
    )
