import uvicorn

from pastebox.core.config import get_settings


def main() -> None:
    """Запуск сервера"""
    settings = get_settings()
    uvicorn.run("pastebox.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
