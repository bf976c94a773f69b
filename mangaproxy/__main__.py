import uvicorn

from mangaproxy.core.config import HOST, LOG_LEVEL, PORT
from mangaproxy.core.logs import configure_logging


def main():
    configure_logging()
    uvicorn.run("mangaproxy.main:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())

if __name__ == "__main__":
    main()
