#!/usr/bin/env python3
"""
Check if all required dependencies are installed and the Gemini key is configured
"""
import sys
import importlib

REQUIRED_PACKAGES = [
    'fastapi',
    'uvicorn',
    'multipart',
    'google.genai',
    'PIL',
    'dotenv',
]


def check_python_packages(required=REQUIRED_PACKAGES):
    """Check if required Python packages are installed"""
    missing = []
    for package in required:
        try:
            importlib.import_module(package)
            print(f"✓ {package}")
        except ImportError:
            print(f"✗ {package} is not installed")
            missing.append(package)

    if missing:
        print(f"\nMissing packages: {', '.join(missing)}")
        print("Run: pip install -e .")
        return False
    return True


def check_api_key():
    """Check that GEMINI_API_KEY is set (via environment or .env)"""
    from forward_verifier.core.config import GEMINI_API_KEY

    if GEMINI_API_KEY:
        print(f"✓ GEMINI_API_KEY: {GEMINI_API_KEY[:6]}...")
        return True
    print("✗ GEMINI_API_KEY is not set")
    print("\nAdd GEMINI_API_KEY=<your key> to backend/.env")
    return False


def main():
    print("Checking dependencies...\n")

    print("Python Packages:")
    packages_ok = check_python_packages()

    print("\nConfiguration:")
    key_ok = check_api_key() if packages_ok else False

    print("\n" + "="*50)
    if packages_ok and key_ok:
        print("✓ All dependencies are installed!")
        return 0
    else:
        print("✗ Some dependencies are missing. Please install them.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
