import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from juscrm.config import get_settings
from juscrm.infrastructure.database import engine, initialize_database
from juscrm.infrastructure.email import EmailSender, MailConfig
from juscrm.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cria as tabelas ao iniciar e libera o pool de conexões ao encerrar."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI do JusCRM."""

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="JusCRM API", lifespan=lifespan)
    app.state.email_sender = EmailSender(MailConfig.from_settings(settings))

    # Autoriza o frontend configurado (por padrão o Vite em localhost:5173).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
