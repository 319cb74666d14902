from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from enrollhub.core.settings import Settings


def add_cors_middleware(app: FastAPI, settings: Settings) -> None:
    # Browsers reject "*" together with credentials, so fall back to the client.
    origins = settings.cors_origins_list
    if origins == ["*"]:
        origins = [settings.client_url]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
