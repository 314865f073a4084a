import asyncio
from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from forward_verifier.core.config import MAX_UPLOAD_BYTES
from forward_verifier.models.claim import ClaimInput, SummaryInput, VerificationResult
from forward_verifier.services.verification_pipeline import VerificationPipeline

router = APIRouter()


def get_pipeline(request: Request) -> VerificationPipeline:
    """Pipeline built once at startup (see main.lifespan)"""
    return request.app.state.pipeline


async def read_upload(file: UploadFile) -> bytes:
    content = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds the {MAX_UPLOAD_BYTES} byte upload limit"
        )
    return content


def render_result(result: VerificationResult) -> dict:
    response = result.model_dump(mode="json")
    response["share_text"] = result.share_text()
    return response


@router.post("/")
async def check_claim(data: ClaimInput, pipeline: VerificationPipeline = Depends(get_pipeline)):
    if not data.claim_text.strip():
        raise HTTPException(
            status_code=422,
            detail="claim_text must not be empty"
        )
    # Run blocking pipeline in threadpool to prevent blocking event loop
    loop = asyncio.get_event_loop()
    result = await loop.run_in_executor(None, pipeline.check_text, data.claim_text)
    return render_result(result)


@router.post("/image")
async def check_image_claim(
    file: UploadFile = File(...),
    pipeline: VerificationPipeline = Depends(get_pipeline)
):
    """
    Verify the text found in an uploaded screenshot or photo.
    """
    file_content = await read_upload(file)
    loop = asyncio.get_event_loop()
    result = await loop.run_in_executor(
        None,
        pipeline.check_image,
        file_content,
        file.content_type
    )
    return render_result(result)


@router.post("/transcribe")
async def transcribe_image(
    file: UploadFile = File(...),
    pipeline: VerificationPipeline = Depends(get_pipeline)
):
    """
    Return the text found in an image without verifying it.
    """
    file_content = await read_upload(file)
    loop = asyncio.get_event_loop()
    text = await loop.run_in_executor(
        None,
        pipeline.transcriber.transcribe,
        file_content,
        file.content_type
    )
    return {"text": text}


@router.post("/summary")
async def summarize(data: SummaryInput, pipeline: VerificationPipeline = Depends(get_pipeline)):
    loop = asyncio.get_event_loop()
    summary = await loop.run_in_executor(
        None,
        pipeline.summarizer.summarize,
        data.explanation,
        data.verdict
    )
    return {"summary": summary}
