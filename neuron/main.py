from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi_pagination import add_pagination

from neuron.auth.rbac import ensure_access_declared
from neuron.commands.base_whatsapp import BaseWhatsappCommand
from neuron.commands.seed_database_command import SeedDatabaseCommand
from neuron.config import Settings, get_settings
from neuron.core.app_state import AppState
from neuron.infra.logging_config import LoggingConfig, get_logger
from neuron.llm.gateway import build_gateway_from_env
from neuron.routers import (
    auth_router,
    contacts_router,
    menu_router,
    permissions_router,
    roles_router,
    system,
    tickets_router,
    users_router,
    webhooks,
    whatsapp_router,
)
from neuron.utils.db.db_session_helper import db_session

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    runtime: AppState = app.state.runtime
    if runtime.settings.seed_on_startup:
        with db_session() as db:
            SeedDatabaseCommand(db).execute()
    await runtime.start()
    logger.info("%s started", runtime.settings.app_name)
    yield
    await runtime.stop()


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def build_runtime(settings: Settings, testing: bool = False) -> AppState:
    runtime = AppState(settings)
    if testing:
        return runtime
    adapter = BaseWhatsappCommand.build_whatsapp_adapter(
        runtime.channel_state, settings
    )
    if adapter is not None:
        runtime.configure_whatsapp(adapter, build_gateway_from_env())
    else:
        logger.info("WhatsApp integration disabled")
    return runtime


def create_app(testing: bool = False) -> FastAPI:
    settings = get_settings()
    LoggingConfig()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.runtime = build_runtime(settings, testing=testing)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(system.router)
    app.include_router(auth_router.router)
    app.include_router(contacts_router.router)
    app.include_router(users_router.router)
    app.include_router(roles_router.router)
    app.include_router(permissions_router.router)
    app.include_router(tickets_router.router)
    app.include_router(menu_router.router)
    app.include_router(whatsapp_router.router)
    app.include_router(webhooks.router)

    add_pagination(app)
    ensure_access_declared(app)

    return app


app = create_app()
