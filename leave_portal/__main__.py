import uvicorn

from .config import get_settings


def main():
    settings = get_settings()
    uvicorn.run("leave_portal.main:app", host=settings.host, port=settings.port,
                log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
