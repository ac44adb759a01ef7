"""Run the API with uvicorn: python -m staffing_api"""

import uvicorn

from staffing_api import config


def main() -> None:
    uvicorn.run(
        "staffing_api.main:app",
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
