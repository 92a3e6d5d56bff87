import uvicorn

from app.config import Settings


def main() -> None:
    settings = Settings.from_env()
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)  # noqa: S104


if __name__ == "__main__":
    main()
