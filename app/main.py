import uvicorn
from dotenv import load_dotenv

load_dotenv()

from infrastructure.logging import get_module_logger  # noqa: E402
from infrastructure.services import get_settings  # noqa: E402
from server import server  # noqa: E402

server_app = server.handler
logger = get_module_logger()


def main():
    """Run the HTTP server."""
    settings = get_settings()
    logger.info("application_startup", prefix=settings.PREFIX or "production")
    uvicorn.run(server_app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
