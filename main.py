"""Run the SoftPack API under uvicorn (HOST, PORT and ENVIRONMENT from the environment)."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv


def main() -> None:
    env_path = Path(__file__).resolve().parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    environment = os.getenv("ENVIRONMENT", "development").lower()

    print(f"SoftPack API ({environment}) on http://{host}:{port}")
    uvicorn.run(
        "softpack_web.main:app",
        host=host,
        port=port,
        reload=environment == "development",
        log_level="info" if environment == "production" else "debug",
    )


if __name__ == "__main__":
    main()
