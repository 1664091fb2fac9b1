"""
Washbook API server.

Usage:
    washbook                              # Run server on port 8000
    uvicorn washbook.main:app --reload    # Development with auto-reload
"""

import os

import uvicorn


def run() -> None:
    """Run the API server (entry point for CLI)."""
    uvicorn.run(
        "washbook.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    run()
