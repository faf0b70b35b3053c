import uvicorn
from loguru import logger

from crudstore.app import create_app
from crudstore.config import get_config
from crudstore.logging_config import configure_logging


def main():
    config = get_config()
    configure_logging(config.log_level, config.json_logs)

    app = create_app(config=config)
    logger.info(f"Starting server on port {config.port}...")
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    main()
