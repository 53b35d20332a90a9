"""Entry point for running the server as a module."""

import os

import uvicorn


def main() -> None:
    """Run the FastAPI server."""
    uvicorn.run(
        "ccswitch.server.app:create_app",
        factory=True,
        host=os.getenv("CCSWITCH_HOST", "0.0.0.0"),
        port=int(os.getenv("CCSWITCH_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
