"""
Job Tracker API - server entry point.

Usage: python main.py [--host HOST] [--port PORT] [--reload]
"""

import argparse

import uvicorn
from dotenv import load_dotenv

load_dotenv()


def main():
    """Serve the API with uvicorn."""
    parser = argparse.ArgumentParser(description="Run the Job Tracker API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    uvicorn.run(
        "backend.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
