import uvicorn

from fourth_facts.config import Settings


def main() -> None:
    settings = Settings()
    uvicorn.run(
        "fourth_facts.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,  # logging is configured by the app lifespan
    )


if __name__ == "__main__":
    main()
