"""
Run the SoulSeed ai-service locally.

Usage:
    python scripts/run_server.py
"""

import uvicorn

from soulseed.config import Settings, load_dotenv


def main():
    load_dotenv()
    settings = Settings.from_env()

    print("=" * 60)
    print("  SoulSeed AI Service")
    print("=" * 60)
    print()
    print(f"Provider: {settings.provider}")
    print(f"Starting server at http://localhost:{settings.port}")
    print(f"API docs: http://localhost:{settings.port}/docs")
    print("Press Ctrl+C to stop.")
    print()

    uvicorn.run(
        "soulseed.api.app:app",
        host="0.0.0.0",
        port=settings.port,
        reload=True,
    )


if __name__ == "__main__":
    main()
