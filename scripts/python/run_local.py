"""Script to run the import service in the local configuration."""

import os

import uvicorn


def main() -> None:
    """Run the server with auto-reload on the loopback interface."""
    os.environ.setdefault("APP_ENV", "development")
    uvicorn.run("recipe_importer.main:app", host="127.0.0.1", port=8000, reload=True)


if __name__ == "__main__":
    main()
