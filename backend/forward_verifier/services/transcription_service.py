import io
from google import genai
from google.genai import types
from PIL import Image
from forward_verifier.core.config import OCR_MODEL
from forward_verifier.core.errors import TranscriptionFailed

TRANSCRIBE_PROMPT = "Transcribe the text in this image. Ignore visual noise."


def sniff_image_mime_type(image_bytes: bytes) -> str:
    """
    Detect the MIME type of an image from its content.

    Raises:
        ValueError: Data is not an image Pillow can identify
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as image:
            image_format = image.format
    except Exception as e:
        raise ValueError(f"Unrecognized image data: {str(e)}") from e

    mime_type = Image.MIME.get(image_format) if image_format else None
    if not mime_type:
        raise ValueError(f"No MIME type known for image format {image_format}")
    return mime_type


class TranscriptionService:
    """
    OCR for uploaded screenshots and photos using Gemini Vision.
    """

    def __init__(self, client: genai.Client, model: str = OCR_MODEL):
        self.client = client
        self.model = model

    def transcribe(self, image_bytes: bytes, mime_type: str = None) -> str:
        """
        Extract legible text from an image.

        Args:
            image_bytes (bytes): Raw image content
            mime_type (str): Declared MIME type; sniffed when missing or not image/*

        Returns:
            str: Transcribed text, or "" when the model found nothing

        Raises:
            TranscriptionFailed: The image could not be sent or the call failed
        """
        if not image_bytes:
            raise TranscriptionFailed()

        try:
            if not mime_type or not mime_type.startswith("image/"):
                mime_type = sniff_image_mime_type(image_bytes)

            print(f"[OCR] Extracting text from image ({mime_type}, {len(image_bytes)} bytes)")
            response = self.client.models.generate_content(
                model=self.model,
                contents=[
                    types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                    TRANSCRIBE_PROMPT,
                ],
            )
            extracted_text = response.text or ""
            print(f"[OCR] Extracted {len(extracted_text.strip())} characters")
            return extracted_text

        except Exception as e:
            print(f"[OCR] OCR error: {str(e)}")
            raise TranscriptionFailed() from e
