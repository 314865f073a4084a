import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Google Gemini API Configuration
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
VERIFY_MODEL = os.getenv("VERIFY_MODEL", "gemini-3-pro-preview")
SUMMARY_MODEL = os.getenv("SUMMARY_MODEL", "gemini-2.5-flash")
OCR_MODEL = os.getenv("OCR_MODEL", "gemini-2.5-flash")

# Transport timeout for every Gemini call, in milliseconds
GEMINI_TIMEOUT_MS = int(os.getenv("GEMINI_TIMEOUT_MS", "60000"))

# Upload Configuration
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

# Server Configuration
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
BACKEND_PORT = int(os.getenv("BACKEND_PORT", "8000"))
BACKEND_HOST = os.getenv("BACKEND_HOST", "0.0.0.0")
