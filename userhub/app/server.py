import os

import uvicorn


def main() -> None:
    """Run the API under uvicorn on HOST:PORT."""
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "3000"))
    uvicorn.run("userhub.app.app:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
