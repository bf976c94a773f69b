from fastapi import FastAPI

from mangaproxy.api.mangadex import router as mangadex_router
from mangaproxy.core.config import ROUTE_PREFIX

app = FastAPI(title="mangaproxy")
app.include_router(mangadex_router, prefix=ROUTE_PREFIX)
