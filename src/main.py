import uvicorn

from infra.config.config import get_config
from infra.web.app import create_app

if __name__ == "__main__":
    config = get_config()
    app = create_app(config)

    uvicorn.run(
        app=app,
        host=config.HOST,
        port=config.PORT,
        access_log=False,
        log_config=None,
    )
