from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from meeting_recap.core.config import HOST, PORT, SECRET_KEY, SESSION_COOKIE
from meeting_recap.core.database import init_db
from meeting_recap.core.logs import configure_logging
from meeting_recap.routers import meetings


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Meeting Recap", lifespan=lifespan)
    # Session cookie is signed here, written by the login service
    app.add_middleware(SessionMiddleware, secret_key=SECRET_KEY, session_cookie=SESSION_COOKIE)

    app.include_router(meetings.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


def run():
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
