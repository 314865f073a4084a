from typing import Callable, Optional
from forward_verifier.core.errors import NoLegibleText
from forward_verifier.models.claim import (
    ImageRequest,
    PipelineStage,
    TextRequest,
    VerificationRequest,
    VerificationResult,
)
from forward_verifier.services.summary_service import SummaryService
from forward_verifier.services.transcription_service import TranscriptionService
from forward_verifier.services.verification_service import VerificationService

StageCallback = Callable[[PipelineStage], None]


class VerificationPipeline:
    """
    Runs one fact-check request end to end:
    1. Transcription (image input only)
    2. Verification with search grounding
    3. Shareable summary

    Steps run strictly in order. Transcription and verification failures
    propagate unchanged and stop the run; summary failures are absorbed by
    SummaryService. Nothing is retried.
    """

    def __init__(
        self,
        verifier: VerificationService,
        summarizer: SummaryService,
        transcriber: TranscriptionService,
    ):
        self.verifier = verifier
        self.summarizer = summarizer
        self.transcriber = transcriber

    def check_text(self, text: str, on_stage: Optional[StageCallback] = None) -> VerificationResult:
        return self.run(TextRequest(content=text), on_stage)

    def check_image(self, data: bytes, mime_type: str = None, on_stage: Optional[StageCallback] = None) -> VerificationResult:
        return self.run(ImageRequest(data=data, mime_type=mime_type), on_stage)

    def run(self, request: VerificationRequest, on_stage: Optional[StageCallback] = None) -> VerificationResult:
        """
        Execute the pipeline for a text or image request.

        Args:
            request (TextRequest | ImageRequest): What to verify
            on_stage (callable): Optional hook called with each PipelineStage

        Returns:
            VerificationResult: Verdict with summary populated
        """
        def enter(stage: PipelineStage):
            print(f"[PIPELINE] {stage.value}")
            if on_stage:
                on_stage(stage)

        enter(PipelineStage.IDLE)
        try:
            extracted_text = None
            if isinstance(request, ImageRequest):
                enter(PipelineStage.TRANSCRIBING)
                extracted_text = self.transcriber.transcribe(request.data, request.mime_type)
                if not extracted_text.strip():
                    raise NoLegibleText()
                claim = extracted_text
            elif isinstance(request, TextRequest):
                claim = request.content
            else:
                raise TypeError(f"Unsupported request type: {type(request).__name__}")

            enter(PipelineStage.VERIFYING)
            verification = self.verifier.verify(claim)

            enter(PipelineStage.SUMMARIZING)
            summary = self.summarizer.summarize(verification.explanation, verification.verdict.value)

            result = verification.with_summary(summary)
            if extracted_text is not None:
                result = result.with_extracted_text(extracted_text)

        except Exception:
            try:
                enter(PipelineStage.FAILED)
            except Exception as hook_error:
                print(f"[PIPELINE] on_stage hook failed: {str(hook_error)}")
            raise

        enter(PipelineStage.DONE)
        return result
